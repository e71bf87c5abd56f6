"""
Unit tests for the LLM client implementations and factory.
"""
import asyncio
import json

import httpx
import openai
import pytest

from llm.client_factory import LLMClientFactory
from llm.errors import ErrorKind, LLMError
from llm.ollama_client import OllamaClient
from llm.openai_client import OpenAIClient, classify_openai_error

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def ollama_with(handler) -> OllamaClient:
    return OllamaClient("llama3", transport=httpx.MockTransport(handler))


def chat(client, prompt="Translate", **kwargs):
    async def call():
        try:
            return await client.chat_completion(prompt, **kwargs)
        finally:
            await client.close()
    return asyncio.run(call())


class TestExtractJson:
    """Tests for BaseLLMClient.extract_json."""

    @pytest.fixture
    def client(self):
        return OllamaClient("llama3")

    def test_plain(self, client):
        assert client.extract_json('{"field_0": "Suša"}') == {"field_0": "Suša"}

    def test_fenced(self, client):
        assert client.extract_json('```json\n{"a": 1}\n```') == {"a": 1}

    def test_surrounding_text(self, client):
        assert client.extract_json('Here you go: {"a": 1} Enjoy') == {"a": 1}

    def test_no_json(self, client):
        with pytest.raises(json.JSONDecodeError):
            client.extract_json('no json here')


class TestOllamaClient:
    """Tests for OllamaClient."""

    def test_json_mode_payload(self):
        seen = {}

        def handler(request):
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"message": {"content": ' {"field_0": "x"} '}})

        content = chat(ollama_with(handler), json_mode=True, temperature=0.1)

        assert content == '{"field_0": "x"}'
        assert seen['format'] == 'json'
        assert seen['stream'] is False
        assert seen['options'] == {'temperature': 0.1}
        assert seen['messages'][-1] == {'role': 'user', 'content': 'Translate'}

    def test_rate_limited(self):
        client = ollama_with(lambda request: httpx.Response(429, text="too many"))

        with pytest.raises(LLMError) as exc_info:
            chat(client)

        assert exc_info.value.kind is ErrorKind.RATE_LIMIT
        assert exc_info.value.provider == 'ollama'

    def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(LLMError) as exc_info:
            chat(ollama_with(handler))

        assert exc_info.value.kind is ErrorKind.NETWORK

    @pytest.mark.parametrize("body", [{"unexpected": True}, {"message": {"content": "  "}}])
    def test_invalid_payload(self, body):
        client = ollama_with(lambda request: httpx.Response(200, json=body))

        with pytest.raises(LLMError) as exc_info:
            chat(client)

        assert exc_info.value.kind is ErrorKind.INVALID_RESPONSE

    def test_count_tokens(self):
        assert OllamaClient("llama3").count_tokens("a" * 40) == 10


class TestOpenAIErrors:
    """Tests for classify_openai_error."""

    def test_rate_limit(self):
        exc = openai.RateLimitError("slow down", response=httpx.Response(429, request=REQUEST), body=None)
        assert classify_openai_error(exc).kind is ErrorKind.RATE_LIMIT

    def test_authentication(self):
        exc = openai.AuthenticationError("bad key", response=httpx.Response(401, request=REQUEST), body=None)
        assert classify_openai_error(exc).kind is ErrorKind.CONFIGURATION

    def test_overloaded(self):
        exc = openai.InternalServerError("busy", response=httpx.Response(503, request=REQUEST), body=None)
        assert classify_openai_error(exc).kind is ErrorKind.MODEL_OVERLOADED

    def test_timeout_before_connection(self):
        assert classify_openai_error(openai.APITimeoutError(request=REQUEST)).kind is ErrorKind.TIMEOUT
        assert classify_openai_error(openai.APIConnectionError(request=REQUEST)).kind is ErrorKind.NETWORK

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv('OPENAI_API_KEY', raising=False)
        monkeypatch.delenv('CHATGPT_API_KEY', raising=False)

        with pytest.raises(LLMError) as exc_info:
            OpenAIClient("gpt-4o-2024-11-20")

        assert exc_info.value.kind is ErrorKind.CONFIGURATION


class TestLLMClientFactory:
    """Tests for LLMClientFactory."""

    def test_create_ollama(self):
        client = LLMClientFactory.create_client(
            'Ollama', 'qwen3:30b', ollama_base_url='http://gpu-box:11434/', ollama_timeout=60
        )

        assert isinstance(client, OllamaClient)
        assert client.base_url == 'http://gpu-box:11434'
        assert client.timeout == 60

    def test_unsupported_provider(self):
        with pytest.raises(LLMError) as exc_info:
            LLMClientFactory.create_client('gemini', 'flash')

        assert exc_info.value.kind is ErrorKind.CONFIGURATION

    def test_supported_providers(self):
        assert LLMClientFactory.get_supported_providers() == ['openai', 'ollama']
