"""
Unit tests for the sync_document command line tool.
"""
import json

import pytest

import sync_document
from conftest import FakeTranslator
from llm.errors import ErrorKind, LLMError


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "proposal.json"
    path.write_text(json.dumps({
        'causes': [{'title': 'Drought', 'category': 'Technical'}],
    }), encoding='utf-8')
    return path


def use_translator(monkeypatch, translator):
    monkeypatch.setattr(sync_document.LLMClientFactory, 'create_client', lambda **kwargs: None)
    monkeypatch.setattr(sync_document, 'FieldTranslator', lambda llm_client: translator)


class TestSyncDocumentCli:
    """Tests for sync_document.main."""

    def test_writes_target(self, monkeypatch, tmp_path, source_file):
        use_translator(monkeypatch, FakeTranslator())
        output = tmp_path / "proposal_si.json"

        sync_document.main([
            str(source_file), '--target-language', 'si',
            '--output', str(output), '--database-url', 'sqlite://'
        ])

        assert json.loads(output.read_text(encoding='utf-8')) == {
            'causes': [{'title': 'si:Drought', 'category': 'Technical'}],
        }

    def test_all_failed_exit_code(self, monkeypatch, tmp_path, source_file):
        use_translator(monkeypatch, FakeTranslator(script=[LLMError(ErrorKind.SERVER_ERROR, "500")]))

        with pytest.raises(SystemExit) as exc_info:
            sync_document.main([
                str(source_file), '--target-language', 'si',
                '--output', str(tmp_path / "out.json"), '--database-url', 'sqlite://'
            ])

        assert exc_info.value.code == 1

    def test_configuration_exit_code(self, monkeypatch, tmp_path, source_file):
        use_translator(monkeypatch, FakeTranslator(script=[LLMError(ErrorKind.CONFIGURATION, "no key")]))

        with pytest.raises(SystemExit) as exc_info:
            sync_document.main([
                str(source_file), '--target-language', 'si',
                '--output', str(tmp_path / "out.json"), '--database-url', 'sqlite://'
            ])

        assert exc_info.value.code == 2
