"""
Synchronization API for bilingual project documents.

Provides endpoints for:
- Storing and reading the language variants of a document
- Incrementally synchronizing one variant from the other
"""
import logging

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_synchronizer
from api.schemas import (
    DocumentVersionRequest,
    DocumentVersionResponse,
    SyncRequest,
    SyncResponse,
    SyncStatsResponse
)
from config.settings import settings
from data.database import init_database
from data.repositories import DocumentVersionRepository
from llm.errors import LLMError
from sync.synchronizer import DocumentSynchronizer, TranslationFailedError

logger = logging.getLogger(__name__)


# Create FastAPI app
sync_app = FastAPI(
    title="Bilingual Document Sync API",
    description="Incremental, structure-aware translation of project documents",
    version="1.0.0"
)


# Initialize database on startup
@sync_app.on_event("startup")
async def startup_event():
    """Initialize database tables on startup."""
    logging.basicConfig(level=settings.log_level)
    init_database()
    print("✓ Sync API initialized")


@sync_app.exception_handler(LLMError)
async def llm_error_handler(request: Request, exc: LLMError):
    """Translation service errors that escape a request."""
    status_code = 503 if exc.fatal else 502
    return JSONResponse(
        status_code=status_code,
        content={'detail': str(exc), 'error_kind': exc.kind.value}
    )


@sync_app.put(
    "/documents/{document_id}/versions/{language}",
    response_model=DocumentVersionResponse
)
async def put_document_version(
    document_id: str,
    language: str,
    request: DocumentVersionRequest,
    db: Session = Depends(get_db)
):
    """
    Store one language variant of a document.

    Args:
        document_id: Document identifier
        language: Language code of the variant
        request: Variant content
        db: Database session

    Returns:
        Stored variant
    """
    version = DocumentVersionRepository(db).save(document_id, language, request.content)
    return DocumentVersionResponse(**version.to_dict())


@sync_app.get(
    "/documents/{document_id}/versions/{language}",
    response_model=DocumentVersionResponse
)
async def get_document_version(
    document_id: str,
    language: str,
    db: Session = Depends(get_db)
):
    """Read one language variant of a document."""
    version = DocumentVersionRepository(db).get(document_id, language)
    if not version:
        raise HTTPException(
            status_code=404,
            detail=f"No '{language}' version of document {document_id}"
        )
    return DocumentVersionResponse(**version.to_dict())


@sync_app.post("/documents/{document_id}/sync", response_model=SyncResponse)
async def sync_document(
    document_id: str,
    request: SyncRequest,
    db: Session = Depends(get_db),
    synchronizer: DocumentSynchronizer = Depends(get_synchronizer)
):
    """
    Synchronize the target-language variant from the source variant.

    Only fields whose source text changed since the last synchronization
    are translated. The resulting target variant is stored.

    Args:
        document_id: Document identifier
        request: Target (and optional source) language
        db: Database session
        synchronizer: Document synchronizer

    Returns:
        Statistics and the synchronized target document
    """
    target_language = request.target_language
    try:
        source_language = request.source_language or settings.source_language_for(target_language)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    versions = DocumentVersionRepository(db)
    source = versions.get_content(document_id, source_language)
    if source is None:
        raise HTTPException(
            status_code=404,
            detail=f"No '{source_language}' version of document {document_id}"
        )
    existing_target = versions.get_content(document_id, target_language)

    try:
        result = await synchronizer.synchronize(
            source,
            target_language,
            existing_target_document=existing_target,
            document_id=document_id,
            source_language=source_language
        )
    except TranslationFailedError as e:
        raise HTTPException(
            status_code=502,
            detail={'message': str(e), 'stats': e.stats.to_dict()}
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    versions.save(document_id, target_language, result.translated_document)

    return SyncResponse(
        document_id=document_id,
        source_language=source_language,
        target_language=target_language,
        outcome=result.stats.outcome,
        stats=SyncStatsResponse(**result.stats.to_dict()),
        translated_document=result.translated_document
    )
