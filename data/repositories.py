"""
Repository pattern for data access.

Provides clean separation between data access and business logic.
"""
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple
from sqlalchemy.orm import Session

from data.db_models import TranslationHash, DocumentVersion


class TranslationHashRepository:
    """Repository for TranslationHash operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_hashes(
        self,
        document_id: str,
        source_lang: str,
        target_lang: str
    ) -> Dict[str, str]:
        """Get all stored field hashes for one sync direction of a document."""
        rows = self.session.query(TranslationHash.field_path, TranslationHash.source_hash)\
            .filter(
                TranslationHash.document_id == document_id,
                TranslationHash.source_lang == source_lang,
                TranslationHash.target_lang == target_lang
            )\
            .all()
        return {field_path: source_hash for field_path, source_hash in rows}

    def upsert_many(
        self,
        document_id: str,
        source_lang: str,
        target_lang: str,
        hashes: Iterable[Tuple[str, str]]
    ) -> int:
        """
        Insert or update hashes keyed by (document, languages, field path).

        Args:
            document_id: Document identifier
            source_lang: Source language code
            target_lang: Target language code
            hashes: (field_path, hash) pairs

        Returns:
            Number of rows written
        """
        now = datetime.utcnow()
        count = 0
        for field_path, source_hash in hashes:
            self.session.merge(TranslationHash(
                document_id=document_id,
                source_lang=source_lang,
                target_lang=target_lang,
                field_path=field_path,
                source_hash=source_hash,
                updated_at=now
            ))
            count += 1
        self.session.commit()
        return count


class DocumentVersionRepository:
    """Repository for DocumentVersion operations."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, document_id: str, language: str) -> Optional[DocumentVersion]:
        """Get one language variant of a document."""
        return self.session.query(DocumentVersion).filter(
            DocumentVersion.document_id == document_id,
            DocumentVersion.language == language
        ).first()

    def get_content(self, document_id: str, language: str):
        """Get the document tree of a variant, or None if it does not exist."""
        version = self.get(document_id, language)
        return version.content if version else None

    def save(self, document_id: str, language: str, content) -> DocumentVersion:
        """Create or replace a language variant."""
        version = self.get(document_id, language)
        if version is None:
            version = DocumentVersion(
                document_id=document_id,
                language=language,
                content=content
            )
            self.session.add(version)
        else:
            version.content = content
        self.session.commit()
        self.session.refresh(version)
        return version
