"""
Engine and session handling for the translation store.

One DatabaseManager owns the engine behind the hash store and the stored
document variants. The API and the CLI share a process-wide manager; tests
build their own on an in-memory database.
"""
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config.settings import settings
from .db_models import Base

logger = logging.getLogger(__name__)

_MEMORY_SQLITE_URLS = ('sqlite://', 'sqlite:///:memory:')


def _engine_options(database_url: str) -> dict:
    """Keyword arguments for create_engine, depending on the backend."""
    if not database_url.startswith('sqlite'):
        return {}
    # FastAPI runs sync dependencies in a threadpool
    options = {'connect_args': {'check_same_thread': False}}
    if database_url in _MEMORY_SQLITE_URLS:
        # One shared connection, otherwise each session opens a new empty DB
        options['poolclass'] = StaticPool
    return options


class DatabaseManager:
    """Engine plus session factory for the translation store."""

    def __init__(self, database_url: str = None):
        """
        Args:
            database_url: SQLAlchemy URL of the store. Defaults to
                settings.database_url.
        """
        self.database_url = database_url or settings.database_url
        self.engine = create_engine(
            self.database_url,
            echo=False,
            **_engine_options(self.database_url)
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_tables(self):
        """Create translation_hashes and document_versions if missing."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Translation store ready at %s", self.database_url)

    def drop_tables(self):
        """Drop both tables, losing every stored hash and variant."""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("Translation store tables dropped at %s", self.database_url)

    def get_session(self) -> Session:
        """New session; the caller closes it."""
        return self.SessionLocal()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Short-lived session that commits on exit and rolls back on error.

        Usage:
            with db_manager.session() as session:
                hashes = TranslationHashRepository(session).get_hashes(doc_id, 'en', 'si')
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_db_manager = None


def get_db_manager(database_url: str = None) -> DatabaseManager:
    """
    Process-wide DatabaseManager, created on first use.

    Args:
        database_url: Store URL, only honoured by the first call
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def init_database(database_url: str = None):
    """Create the store tables on the process-wide manager."""
    get_db_manager(database_url).create_tables()
