"""
Change-set calculation.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.document import get_by_path, is_blank
from core.models import LeafEntry


@dataclass
class ChangeSet:
    """Translatable leaves split by whether they need translating."""
    changed: List[LeafEntry] = field(default_factory=list)
    unchanged: List[LeafEntry] = field(default_factory=list)


def compute_change_set(
    entries: Iterable[LeafEntry],
    stored_hashes: Dict[str, str],
    target_document: Optional[Any] = None
) -> ChangeSet:
    """
    Compare current leaf hashes with the stored ones.

    Args:
        entries: Translatable leaves of the source document
        stored_hashes: field path string -> hash from the last sync
        target_document: Target tree; when given, a leaf whose target slot is
            missing or blank counts as changed even if its hash matches

    Returns:
        ChangeSet with changed and unchanged leaves, in input order
    """
    change_set = ChangeSet()
    for entry in entries:
        stored = stored_hashes.get(entry.path_string)
        changed = stored is None or stored != entry.content_hash
        if not changed and target_document is not None:
            changed = is_blank(get_by_path(target_document, entry.path))
        if changed:
            change_set.changed.append(entry)
        else:
            change_set.unchanged.append(entry)
    return change_set
