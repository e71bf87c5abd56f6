"""
Unit tests for translation.rules module.
"""
from core.constants import TRANSLATION_RULES
from translation.rules import get_translation_rules


class TestGetTranslationRules:
    """Tests for get_translation_rules."""

    def test_defaults_per_language(self):
        assert get_translation_rules('si').splitlines() == TRANSLATION_RULES['si']
        assert get_translation_rules('en').splitlines() == TRANSLATION_RULES['en']

    def test_unknown_language_falls_back(self):
        assert get_translation_rules('de') == get_translation_rules('en')

    def test_override(self):
        override = "Use formal register\n\n  Keep acronyms  "
        assert get_translation_rules('si', override) == "Use formal register\nKeep acronyms"

    def test_blank_override_ignored(self):
        assert get_translation_rules('si', '   ') == get_translation_rules('si')
