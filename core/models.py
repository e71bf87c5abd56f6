"""
Core domain models for document synchronization.

These are pure data structures without business logic.
"""
from dataclasses import dataclass, field
from typing import Any, Tuple, Union

PathSegment = Union[str, int]
FieldPath = Tuple[PathSegment, ...]


@dataclass(frozen=True)
class LeafEntry:
    """A single addressable text value inside a document tree."""
    path: FieldPath
    value: str
    content_hash: str

    @property
    def path_string(self) -> str:
        """Persisted form of the path (see core.document.format_path)."""
        from .document import format_path
        return format_path(self.path)

    @property
    def section(self) -> str:
        """Top-level section the leaf belongs to."""
        if not self.path:
            return ''
        return str(self.path[0])


@dataclass(frozen=True)
class SyncContext:
    """Identifies one synchronization direction of one document."""
    document_id: str
    source_lang: str
    target_lang: str


@dataclass
class SyncStats:
    """Counters surfaced to the caller after a synchronization."""
    total: int = 0
    changed: int = 0
    translated: int = 0
    failed: int = 0

    @property
    def outcome(self) -> str:
        """One of 'up_to_date', 'complete', 'partial' or 'failed'."""
        if self.changed == 0:
            return 'up_to_date'
        if self.failed == 0:
            return 'complete'
        if self.translated == 0:
            return 'failed'
        return 'partial'

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'total': self.total,
            'changed': self.changed,
            'translated': self.translated,
            'failed': self.failed,
        }


@dataclass
class SyncResult:
    """Reconciled target document plus statistics."""
    translated_document: Any
    stats: SyncStats = field(default_factory=SyncStats)
