"""
Base class for translation collaborators.

The synchronization core only talks to this interface: it submits a map of
opaque keys to source texts and gets back a map of the keys that were
translated.
"""

from abc import ABC, abstractmethod
from typing import Dict


class BaseTranslator(ABC):
    """
    Interface of the external translation service.

    Implementations raise llm.errors.LLMError so the orchestrator can decide
    whether a failure is retryable, fatal or terminal for one batch.
    """

    @abstractmethod
    async def translate(
        self,
        source_texts: Dict[str, str],
        target_language: str,
        rule_set: str
    ) -> Dict[str, str]:
        """
        Translate a batch of texts.

        Args:
            source_texts: Opaque key -> source text
            target_language: Target language code
            rule_set: Natural-language translation instructions

        Returns:
            Key -> translated text. Keys the service could not translate may
            be missing.
        """
        pass

    def count_tokens(self, text: str) -> int:
        """Rough token estimate used for batch sizing."""
        return len(text) // 4
