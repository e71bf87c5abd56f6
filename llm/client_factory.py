"""
Factory for creating LLM clients.

This provides a centralized way to instantiate the correct LLM client
based on the provider configuration.
"""

from .llm_client_base import BaseLLMClient
from .openai_client import OpenAIClient
from .ollama_client import OllamaClient
from .errors import ErrorKind, LLMError


class LLMClientFactory:
    """
    Factory class for creating LLM clients.
    """

    @staticmethod
    def create_client(
        provider: str,
        model: str,
        **kwargs
    ) -> BaseLLMClient:
        """
        Create an LLM client based on the provider.

        Args:
            provider: Provider name ('openai' or 'ollama')
            model: Model name/identifier
            **kwargs: Provider-specific configuration
                For OpenAI:
                    - api_key: Optional API key
                For Ollama:
                    - ollama_base_url: Ollama server URL (default: http://localhost:11434)
                    - ollama_timeout: Request timeout in seconds (default: 300)

        Returns:
            Configured LLM client instance

        Raises:
            LLMError: CONFIGURATION if provider is not supported or credentials are missing
        """
        provider = provider.lower().strip()

        if provider == 'openai':
            return OpenAIClient(
                model=model,
                api_key=kwargs.get('api_key')
            )
        elif provider == 'ollama':
            return OllamaClient(
                model=model,
                base_url=kwargs.get('ollama_base_url') or 'http://localhost:11434',
                timeout=kwargs.get('ollama_timeout') or 300
            )
        else:
            raise LLMError(
                ErrorKind.CONFIGURATION,
                f"Unsupported LLM provider: '{provider}'. "
                f"Supported providers: 'openai', 'ollama'"
            )

    @staticmethod
    def from_settings(settings) -> BaseLLMClient:
        """Create the client described by a Settings instance."""
        config = settings.get_llm_config()
        provider = config.pop('provider')
        model = config.pop('model')
        return LLMClientFactory.create_client(provider, model, **config)

    @staticmethod
    def get_supported_providers():
        """
        Get list of supported providers.

        Returns:
            List of provider names
        """
        return ['openai', 'ollama']
