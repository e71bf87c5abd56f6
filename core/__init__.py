"""Core package - Domain models, constants and document tree primitives."""

from .models import LeafEntry, SyncContext, SyncStats, SyncResult
from .constants import (
    SKIP_KEYS,
    SKIP_VALUES,
    DEFAULT_SYNC_PARAMS,
    BATCH_KEY_PREFIX,
    LANGUAGE_NAMES,
    TRANSLATION_RULES
)
from .document import (
    NodeKind,
    node_kind,
    content_hash,
    format_path,
    parse_path,
    get_by_path,
    set_by_path,
    index_leaves
)
from .classifier import FieldClassifier

__all__ = [
    'LeafEntry',
    'SyncContext',
    'SyncStats',
    'SyncResult',
    'SKIP_KEYS',
    'SKIP_VALUES',
    'DEFAULT_SYNC_PARAMS',
    'BATCH_KEY_PREFIX',
    'LANGUAGE_NAMES',
    'TRANSLATION_RULES',
    'NodeKind',
    'node_kind',
    'content_hash',
    'format_path',
    'parse_path',
    'get_by_path',
    'set_by_path',
    'index_leaves',
    'FieldClassifier'
]
