"""
Configuration management using Pydantic Settings.

Environment variables:
- DATABASE_URL: SQLAlchemy database URL for the hash store
- LLM_PROVIDER / LLM_MODEL: translation backend ('openai' or 'ollama')
- OPENAI_API_KEY: API key for the OpenAI provider
- PRIMARY_LANGUAGE / SECONDARY_LANGUAGE: the synchronized language pair
- SYNC_*: batching, delay and retry tuning
- TRANSLATION_RULES_OVERRIDE: newline-separated rules replacing the defaults
"""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import DEFAULT_SYNC_PARAMS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(default="sqlite:///translation_store.db")

    # LLM Configuration
    llm_provider: str = Field(default="openai")
    llm_model: str = Field(default="gpt-4o-2024-11-20")
    openai_api_key: Optional[str] = Field(default=None)
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_timeout: int = Field(default=300)

    # Language pair
    primary_language: str = Field(default="en")
    secondary_language: str = Field(default="si")

    # Synchronization tuning
    sync_batch_size: int = Field(default=DEFAULT_SYNC_PARAMS['batch_size'])
    sync_batch_delay: float = Field(default=DEFAULT_SYNC_PARAMS['batch_delay'])
    sync_max_retries: int = Field(default=DEFAULT_SYNC_PARAMS['max_retries'])
    sync_backoff_base: float = Field(default=DEFAULT_SYNC_PARAMS['backoff_base'])
    sync_backoff_max: float = Field(default=DEFAULT_SYNC_PARAMS['backoff_max'])
    # 0 disables the token budget; batches are then bounded by size only
    sync_max_batch_tokens: int = Field(default=DEFAULT_SYNC_PARAMS['max_batch_tokens'])

    translation_rules_override: Optional[str] = Field(default=None)

    log_level: str = Field(default="INFO")

    def get_sync_config(self) -> dict:
        """Get batch orchestration parameters as dictionary."""
        return {
            'batch_size': self.sync_batch_size,
            'batch_delay': self.sync_batch_delay,
            'max_retries': self.sync_max_retries,
            'backoff_base': self.sync_backoff_base,
            'backoff_max': self.sync_backoff_max,
            'max_batch_tokens': self.sync_max_batch_tokens,
        }

    def get_llm_config(self) -> dict:
        """Get LLM client configuration as dictionary."""
        return {
            'provider': self.llm_provider,
            'model': self.llm_model,
            'api_key': self.openai_api_key,
            'ollama_base_url': self.ollama_base_url,
            'ollama_timeout': self.ollama_timeout,
        }

    def source_language_for(self, target_language: str) -> str:
        """
        Resolve the source language of a sync towards target_language.

        Raises:
            ValueError: If target_language is not part of the language pair
        """
        if target_language == self.secondary_language:
            return self.primary_language
        if target_language == self.primary_language:
            return self.secondary_language
        raise ValueError(
            f"Unsupported target language '{target_language}'. "
            f"Configured pair: '{self.primary_language}', '{self.secondary_language}'"
        )


# Global settings instance
settings = Settings()
