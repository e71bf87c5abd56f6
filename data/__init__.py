"""Data access layer - Translation store models, engine and repositories."""

from .db_models import Base, TranslationHash, DocumentVersion
from .database import DatabaseManager, get_db_manager, init_database
from .repositories import TranslationHashRepository, DocumentVersionRepository

__all__ = [
    # Models
    'Base',
    'TranslationHash',
    'DocumentVersion',

    # Database
    'DatabaseManager',
    'get_db_manager',
    'init_database',

    # Repositories
    'TranslationHashRepository',
    'DocumentVersionRepository'
]
