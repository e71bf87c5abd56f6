"""
API Dependencies - Dependency injection for FastAPI.

Provides reusable dependencies for database sessions, translators and the
document synchronizer.
"""
from typing import Generator

from data.database import get_db_manager
from llm.client_factory import LLMClientFactory
from sync.hash_store import HashStore
from sync.synchronizer import DocumentSynchronizer
from translation.base import BaseTranslator
from translation.field_translator import FieldTranslator
from config.settings import settings


def get_db() -> Generator:
    """
    Dependency for database session.

    Yields:
        SQLAlchemy session
    """
    db_manager = get_db_manager()
    db = db_manager.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_translator() -> BaseTranslator:
    """
    Dependency for the translation collaborator.

    Raises:
        LLMError: CONFIGURATION if the provider cannot be set up
    """
    return FieldTranslator(LLMClientFactory.from_settings(settings))


def get_hash_store() -> HashStore:
    """Dependency for the hash store."""
    return HashStore(get_db_manager())


def get_synchronizer() -> DocumentSynchronizer:
    """
    Dependency for the document synchronizer.

    Returns:
        DocumentSynchronizer wired from global settings
    """
    return DocumentSynchronizer(
        translator=get_translator(),
        hash_store=get_hash_store(),
        settings=settings
    )
