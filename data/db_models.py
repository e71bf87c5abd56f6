"""
Database models for bilingual document synchronization.

Stores per-field translation hashes and the language variants of documents.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, DateTime, JSON, UniqueConstraint
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_uuid():
    """Generate UUID string for primary keys."""
    return str(uuid.uuid4())


class TranslationHash(Base):
    """Fingerprint of a source field at its last successful synchronization."""

    __tablename__ = 'translation_hashes'

    document_id = Column(String, primary_key=True)
    source_lang = Column(String, primary_key=True)
    target_lang = Column(String, primary_key=True)
    field_path = Column(String, primary_key=True)
    source_hash = Column(String, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return (
            f"<TranslationHash(doc_id={self.document_id}, "
            f"{self.source_lang}->{self.target_lang}, path={self.field_path})>"
        )


class DocumentVersion(Base):
    """One language variant of a project document."""

    __tablename__ = 'document_versions'
    __table_args__ = (
        UniqueConstraint('document_id', 'language', name='uq_document_language'),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    document_id = Column(String, nullable=False, index=True)
    language = Column(String, nullable=False)

    # Full document tree as JSON
    content = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<DocumentVersion(doc_id={self.document_id}, language={self.language})>"

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'document_id': self.document_id,
            'language': self.language,
            'content': self.content,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
