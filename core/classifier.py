"""
Field classification.

Splits leaves into translatable text and structural fields that must be
copied verbatim between language variants.
"""
from typing import Iterable, List, Optional, Tuple

from .constants import SKIP_KEYS, SKIP_VALUES
from .models import FieldPath, LeafEntry


class FieldClassifier:
    """Decides whether a leaf is structural or translatable."""

    def __init__(
        self,
        skip_keys: Optional[Iterable[str]] = None,
        skip_values: Optional[Iterable[str]] = None
    ):
        self.skip_keys = frozenset(SKIP_KEYS if skip_keys is None else skip_keys)
        self.skip_values = frozenset(SKIP_VALUES if skip_values is None else skip_values)

    def is_structural_key(self, key) -> bool:
        return key in self.skip_keys

    def is_structural_value(self, value) -> bool:
        return isinstance(value, str) and value.strip() in self.skip_values

    def has_structural_ancestor(self, path: FieldPath) -> bool:
        """True if any map key along path is a skip-key."""
        return any(
            isinstance(segment, str) and self.is_structural_key(segment)
            for segment in path
        )

    def is_structural(self, entry: LeafEntry) -> bool:
        """
        Check a leaf against both skip-sets.

        A leaf anywhere below a skip-key is structural.

        Args:
            entry: Leaf produced by the path indexer

        Returns:
            True if the leaf must never be translated
        """
        if self.has_structural_ancestor(entry.path):
            return True
        return self.is_structural_value(entry.value)

    def partition(
        self,
        entries: Iterable[LeafEntry]
    ) -> Tuple[List[LeafEntry], List[LeafEntry]]:
        """Split entries into (translatable, structural), keeping order."""
        translatable, structural = [], []
        for entry in entries:
            if self.is_structural(entry):
                structural.append(entry)
            else:
                translatable.append(entry)
        return translatable, structural
