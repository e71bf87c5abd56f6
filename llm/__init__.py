"""
LLM Client abstraction layer.

This module provides a unified interface for different LLM providers (OpenAI, Ollama, etc.)
using the Strategy Pattern, and a closed error taxonomy shared by all of them.
"""

from .errors import ErrorKind, LLMError, error_kind_from_status, classify_exception
from .llm_client_base import BaseLLMClient
from .openai_client import OpenAIClient
from .ollama_client import OllamaClient
from .client_factory import LLMClientFactory

__all__ = [
    'ErrorKind',
    'LLMError',
    'error_kind_from_status',
    'classify_exception',
    'BaseLLMClient',
    'OpenAIClient',
    'OllamaClient',
    'LLMClientFactory',
]
