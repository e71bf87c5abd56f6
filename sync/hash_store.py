"""
Hash store client.

Persists per-field content hashes between synchronization runs. Persistence
is best effort: a failed read means "no prior state" and a failed write only
costs extra work on the next run.
"""
import logging
from typing import Dict, Iterable

from sqlalchemy.exc import SQLAlchemyError

from core.models import LeafEntry
from data.database import DatabaseManager
from data.repositories import TranslationHashRepository

logger = logging.getLogger(__name__)


class HashStore:
    """Reads and upserts TranslationHash rows through short-lived sessions."""

    def __init__(self, db_manager: DatabaseManager):
        """
        Args:
            db_manager: Database manager owning the engine and session factory
        """
        self.db_manager = db_manager

    def load(self, document_id: str, source_lang: str, target_lang: str) -> Dict[str, str]:
        """
        Load stored hashes for one sync direction of a document.

        Returns:
            field path string -> hash; empty if nothing is stored or the
            store could not be read
        """
        try:
            with self.db_manager.session() as session:
                return TranslationHashRepository(session).get_hashes(
                    document_id, source_lang, target_lang
                )
        except SQLAlchemyError as e:
            logger.warning(
                "Could not load translation hashes for %s (%s->%s), assuming full resync: %s",
                document_id, source_lang, target_lang, e
            )
            return {}

    def save(
        self,
        document_id: str,
        source_lang: str,
        target_lang: str,
        entries: Iterable[LeafEntry]
    ) -> int:
        """
        Upsert the hashes of the given leaves.

        Returns:
            Number of rows written (0 on failure)
        """
        pairs = [(entry.path_string, entry.content_hash) for entry in entries]
        if not pairs:
            return 0
        try:
            with self.db_manager.session() as session:
                return TranslationHashRepository(session).upsert_many(
                    document_id, source_lang, target_lang, pairs
                )
        except SQLAlchemyError as e:
            logger.warning(
                "Could not save %d translation hashes for %s (%s->%s): %s",
                len(pairs), document_id, source_lang, target_lang, e
            )
            return 0
