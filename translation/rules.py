"""
Translation rule-set provider.
"""
from typing import Optional

from core.constants import TRANSLATION_RULES


def get_translation_rules(language: str = 'en', override: Optional[str] = None) -> str:
    """
    Rules injected into every translation request.

    Args:
        language: Target language code
        override: Newline-separated rules replacing the defaults

    Returns:
        Rules as newline-separated text
    """
    if override and override.strip():
        lines = [line.strip() for line in override.splitlines() if line.strip()]
    else:
        lines = TRANSLATION_RULES.get(language) or TRANSLATION_RULES['en']
    return '\n'.join(lines)
