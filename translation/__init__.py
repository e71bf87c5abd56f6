"""
Translation Module.

Provides the translation collaborator used by document synchronization:
- BaseTranslator interface
- LLM-backed FieldTranslator
- Default translation rules
"""

from .base import BaseTranslator
from .field_translator import FieldTranslator
from .rules import get_translation_rules

__all__ = [
    'BaseTranslator',
    'FieldTranslator',
    'get_translation_rules',
]
