"""
Base abstract class for LLM clients.

This defines the interface that all LLM provider implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
import json
import re


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients.

    All LLM provider implementations (OpenAI, Ollama, etc.) must inherit from this
    class and implement the abstract methods. Provider failures must be raised
    as llm.errors.LLMError.
    """

    provider = 'base'

    def __init__(self, model: str, **kwargs):
        """
        Initialize the LLM client.

        Args:
            model: Model name/identifier
            **kwargs: Additional provider-specific configuration
        """
        self.model = model
        self.config = kwargs

    @abstractmethod
    async def chat_completion(
        self,
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None,
        json_mode: bool = False,
        **kwargs
    ) -> str:
        """
        Perform a chat completion request.

        Args:
            prompt: The user prompt/message
            chat_history: Optional conversation history in format [{"role": "user/assistant", "content": "..."}]
            json_mode: Ask the provider to constrain output to a JSON object
            **kwargs: Additional parameters (temperature, max_tokens, etc.)

        Returns:
            The model's response as a string

        Raises:
            LLMError: If the API call fails
        """
        pass

    @abstractmethod
    def count_tokens(self, text: str) -> int:
        """
        Count the number of tokens in the given text.

        Args:
            text: Text to count tokens for

        Returns:
            Number of tokens
        """
        pass

    @staticmethod
    def build_messages(
        prompt: str,
        chat_history: Optional[List[Dict[str, str]]] = None
    ) -> List[Dict[str, str]]:
        """Append the prompt to an optional conversation history."""
        messages = []
        if chat_history:
            messages.extend(chat_history)
        messages.append({"role": "user", "content": prompt})
        return messages

    def extract_json(self, content: str) -> Any:
        """
        Extract JSON from LLM response.

        This handles common cases like:
        - JSON wrapped in markdown code blocks
        - JSON with extra text before/after

        Args:
            content: Raw response content from LLM

        Returns:
            Parsed JSON value

        Raises:
            json.JSONDecodeError: If no valid JSON found
        """
        # Try direct JSON parse first
        try:
            return json.loads(self.get_json_content(content))
        except json.JSONDecodeError:
            pass

        # Try to extract from markdown code blocks
        json_match = re.search(r'```json\s*\n(.*?)\n```', content, re.DOTALL)
        if json_match:
            try:
                return json.loads(json_match.group(1))
            except json.JSONDecodeError:
                pass

        # Try to find JSON object in the content
        json_match = re.search(r'\{.*\}', content, re.DOTALL)
        if json_match:
            try:
                return json.loads(json_match.group(0))
            except json.JSONDecodeError:
                pass

        raise json.JSONDecodeError(
            f"Could not extract valid JSON from content: {content[:200]}...",
            content,
            0
        )

    def get_json_content(self, response: str) -> str:
        """
        Strip a surrounding markdown code fence.

        Args:
            response: Response text that may contain ```json ... ``` blocks

        Returns:
            Extracted JSON string
        """
        response = response.strip()
        if response.startswith('```json'):
            response = response.replace('```json', '', 1)
        elif response.startswith('```'):
            response = response.replace('```', '', 1)
        if response.endswith('```'):
            response = response[:-3]
        return response.strip()
