"""
Ollama client implementation.

This wraps the Ollama API and implements the BaseLLMClient interface.
"""

import httpx
from typing import Optional, Dict, List
from .llm_client_base import BaseLLMClient
from .errors import ErrorKind, LLMError, classify_exception


class OllamaClient(BaseLLMClient):
    """
    LLM client for Ollama (local LLM server).
    """

    provider = 'ollama'

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        timeout: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Ollama client.

        Args:
            model: Ollama model name (e.g., 'qwen3:30b', 'llama3:latest')
            base_url: Ollama server URL (default: http://localhost:11434)
            timeout: Request timeout in seconds (default: 300)
            transport: Optional httpx transport (used by tests)
            **kwargs: Additional configuration
        """
        super().__init__(model, **kwargs)

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        json_mode: bool = False,
        **kwargs
    ) -> str:
        """
        Call Ollama chat completion API.

        Args:
            prompt: User prompt
            chat_history: Optional conversation history
            json_mode: Ask Ollama to emit a JSON document
            **kwargs: Additional parameters (temperature, etc.)

        Returns:
            Model response text

        Raises:
            LLMError: NETWORK if the server is unreachable, a status-derived
                kind for HTTP errors, INVALID_RESPONSE for malformed payloads
        """
        payload = {
            "model": self.model,
            "messages": self.build_messages(prompt, chat_history),
            "stream": False,
        }
        if json_mode:
            payload['format'] = 'json'

        # Add optional parameters
        options = {}
        if 'temperature' in kwargs:
            options['temperature'] = kwargs['temperature']
        if options:
            payload['options'] = options

        try:
            response = await self.client.post("/api/chat", json=payload)
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise LLMError(
                ErrorKind.NETWORK,
                f"Could not connect to Ollama server at {self.base_url}. "
                f"Please ensure Ollama is running (e.g., 'ollama serve') and "
                f"you have pulled the model (e.g., 'ollama pull {self.model}'). "
                f"Error: {e}",
                self.provider
            ) from e
        except httpx.HTTPError as e:
            raise classify_exception(e, self.provider) from e

        try:
            result = response.json()
            content = result['message']['content']
        except (ValueError, KeyError, TypeError) as e:
            raise LLMError(
                ErrorKind.INVALID_RESPONSE,
                f"Invalid JSON response from Ollama: {response.text[:200]}",
                self.provider
            ) from e

        if not content or not content.strip():
            raise LLMError(ErrorKind.INVALID_RESPONSE, "Ollama returned empty response", self.provider)
        return content.strip()

    def count_tokens(self, text: str) -> int:
        """
        Estimate token count for Ollama models.

        Since Ollama doesn't provide a tokenizer API, we use a simple heuristic:
        approximately 4 characters per token (similar to OpenAI's GPT models).
        """
        return len(text) // 4

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
