"""
OpenAI client implementation.

This wraps the OpenAI API and implements the BaseLLMClient interface.
"""

import os
from typing import Optional, Dict, List
import tiktoken
import openai
from openai import AsyncOpenAI
from .llm_client_base import BaseLLMClient
from .errors import ErrorKind, LLMError, error_kind_from_status


def classify_openai_error(exc: Exception) -> LLMError:
    """
    Convert an OpenAI SDK exception into an LLMError.

    Args:
        exc: Exception raised by the SDK

    Returns:
        LLMError tagged with the matching ErrorKind
    """
    message = str(exc)[:200]
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return LLMError(ErrorKind.CONFIGURATION, message, OpenAIClient.provider)
    if isinstance(exc, openai.RateLimitError):
        return LLMError(ErrorKind.RATE_LIMIT, message, OpenAIClient.provider)
    # APITimeoutError subclasses APIConnectionError, check it first
    if isinstance(exc, openai.APITimeoutError):
        return LLMError(ErrorKind.TIMEOUT, message, OpenAIClient.provider)
    if isinstance(exc, openai.APIConnectionError):
        return LLMError(ErrorKind.NETWORK, message, OpenAIClient.provider)
    if isinstance(exc, openai.APIStatusError):
        return LLMError(error_kind_from_status(exc.status_code), message, OpenAIClient.provider)
    return LLMError(ErrorKind.UNKNOWN, message, OpenAIClient.provider)


class OpenAIClient(BaseLLMClient):
    """
    LLM client for OpenAI API.
    """

    provider = 'openai'

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize OpenAI client.

        Args:
            model: OpenAI model name (e.g., 'gpt-4o-2024-11-20')
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            **kwargs: Additional configuration

        Raises:
            LLMError: CONFIGURATION if no API key is available
        """
        super().__init__(model, **kwargs)

        # Get API key from parameter or environment
        self.api_key = api_key or os.getenv('OPENAI_API_KEY') or os.getenv('CHATGPT_API_KEY')
        if not self.api_key:
            raise LLMError(
                ErrorKind.CONFIGURATION,
                "OpenAI API key not found. Please set OPENAI_API_KEY environment variable "
                "or pass api_key parameter.",
                self.provider
            )

        # SDK retries are disabled: the batch orchestrator owns retry/backoff
        self.client = AsyncOpenAI(api_key=self.api_key, max_retries=0)

        # Initialize tokenizer
        try:
            self.encoding = tiktoken.encoding_for_model(model)
        except KeyError:
            # Fallback to cl100k_base for unknown models
            self.encoding = tiktoken.get_encoding("cl100k_base")

    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        json_mode: bool = False,
        **kwargs
    ) -> str:
        """
        Call OpenAI chat completion API.

        Args:
            prompt: User prompt
            chat_history: Optional conversation history
            json_mode: Request a JSON object response
            **kwargs: Additional parameters (temperature, max_tokens, etc.)

        Returns:
            Model response text
        """
        if json_mode:
            kwargs['response_format'] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(prompt, chat_history),
                **kwargs
            )
        except openai.OpenAIError as e:
            raise classify_openai_error(e) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMError(ErrorKind.INVALID_RESPONSE, "OpenAI returned empty response", self.provider)
        return content.strip()

    def count_tokens(self, text: str) -> int:
        """
        Count tokens using tiktoken.

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens
        """
        return len(self.encoding.encode(text))
