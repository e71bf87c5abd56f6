"""
Document synchronization.

Incremental, structure-aware reconciliation of two language variants of a
document:
- Hash store client
- Change-set calculation
- Batch translation orchestration
- Tree reconciliation
"""

from .hash_store import HashStore
from .change_set import ChangeSet, compute_change_set
from .orchestrator import Batch, BatchOutcome, BatchState, BatchTranslationOrchestrator
from .reconciler import (
    structural_clone,
    overlay_structural,
    write_back,
    apply_fallback,
    deep_merge
)
from .synchronizer import DocumentSynchronizer, TranslationFailedError

__all__ = [
    'HashStore',
    'ChangeSet',
    'compute_change_set',
    'Batch',
    'BatchOutcome',
    'BatchState',
    'BatchTranslationOrchestrator',
    'structural_clone',
    'overlay_structural',
    'write_back',
    'apply_fallback',
    'deep_merge',
    'DocumentSynchronizer',
    'TranslationFailedError',
]
