"""
LLM-backed field translator.

Sends a batch of field values to an LLM as one JSON object and reads the
translated object back.
"""

import json
import logging
from typing import Dict, Optional

from core.constants import LANGUAGE_NAMES
from llm.errors import ErrorKind, LLMError, classify_exception
from llm.llm_client_base import BaseLLMClient
from .base import BaseTranslator

logger = logging.getLogger(__name__)


class FieldTranslator(BaseTranslator):
    """
    Translates key -> text maps through an LLM client.

    Keys are echoed back by the model; only keys that were requested and come
    back as non-empty strings are returned.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        language_names: Optional[Dict[str, str]] = None
    ):
        """
        Initialize translator.

        Args:
            llm_client: LLM client for translations
            language_names: Language code -> display name used in prompts
        """
        self.llm_client = llm_client
        self.language_names = language_names or LANGUAGE_NAMES

    def count_tokens(self, text: str) -> int:
        return self.llm_client.count_tokens(text)

    def build_prompt(
        self,
        source_texts: Dict[str, str],
        target_language: str,
        rule_set: str
    ) -> str:
        """
        Assemble the translation prompt.

        Args:
            source_texts: Opaque key -> source text
            target_language: Target language code
            rule_set: Translation rules, one per line

        Returns:
            Prompt text
        """
        language_name = self.language_names.get(target_language, target_language)
        rules = '\n'.join(
            f"- {line.strip()}" for line in rule_set.splitlines() if line.strip()
        )
        sections = [
            "You are a professional translator for EU project proposals.",
            f"Translate each value in the following JSON object into {language_name}.",
        ]
        if rules:
            sections.append(f"RULES:\n{rules}")
        sections.append(
            "\nADDITIONAL:\n"
            "- Keep all keys exactly as they are (field_0, field_1, etc.).\n"
            "- Return ONLY valid JSON. No markdown, no explanation."
        )
        sections.append(f"\nJSON:\n{json.dumps(source_texts, ensure_ascii=False, indent=2)}")
        return '\n'.join(sections)

    async def translate(
        self,
        source_texts: Dict[str, str],
        target_language: str,
        rule_set: str
    ) -> Dict[str, str]:
        """
        Translate a batch of texts.

        Raises:
            LLMError: Provider failures, or INVALID_RESPONSE when the reply
                is not a JSON object
        """
        if not source_texts:
            return {}

        prompt = self.build_prompt(source_texts, target_language, rule_set)
        try:
            response = await self.llm_client.chat_completion(prompt, json_mode=True)
        except LLMError:
            raise
        except Exception as e:
            raise classify_exception(e, self.llm_client.provider) from e

        try:
            translated = self.llm_client.extract_json(response)
        except json.JSONDecodeError as e:
            raise LLMError(
                ErrorKind.INVALID_RESPONSE,
                f"Translation response is not JSON: {response[:200]}",
                self.llm_client.provider
            ) from e

        if not isinstance(translated, dict):
            raise LLMError(
                ErrorKind.INVALID_RESPONSE,
                f"Expected a JSON object, got {type(translated).__name__}",
                self.llm_client.provider
            )

        results = {}
        for key in source_texts:
            value = translated.get(key)
            if isinstance(value, str) and value.strip():
                results[key] = value.strip()

        missing = len(source_texts) - len(results)
        if missing:
            logger.debug("Translation response omitted %d of %d keys", missing, len(source_texts))
        return results
