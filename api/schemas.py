"""
Pydantic schemas for API request/response validation.
"""
from typing import Any, Optional
from pydantic import BaseModel


class DocumentVersionRequest(BaseModel):
    """Request body for storing a language variant."""
    content: Any


class DocumentVersionResponse(BaseModel):
    """Response for a stored language variant."""
    document_id: str
    language: str
    content: Any
    updated_at: Optional[str] = None


class SyncRequest(BaseModel):
    """Request body for synchronizing a document."""
    target_language: str
    source_language: Optional[str] = None


class SyncStatsResponse(BaseModel):
    """Counters of a synchronization run."""
    total: int
    changed: int
    translated: int
    failed: int


class SyncResponse(BaseModel):
    """Response for a synchronization run."""
    document_id: str
    source_language: str
    target_language: str
    outcome: str
    stats: SyncStatsResponse
    translated_document: Any
