"""
Tree reconciliation.

Writes translated leaves back into the target document, keeps structural
fields identical to the source, fills gaps left by failed translations and
deep-merges generated content into user-authored trees.
"""
import copy
from typing import Any, Dict, Iterable

from core.classifier import FieldClassifier
from core.document import NodeKind, empty_container, get_by_path, is_blank, node_kind, set_by_path
from core.models import LeafEntry


def structural_clone(source: Any, classifier: FieldClassifier) -> Any:
    """
    Copy the shape of source with translatable text blanked out.

    Containers, structural fields, structural values and non-text scalars
    are kept; every other string becomes ''.
    """
    kind = node_kind(source)
    if kind is NodeKind.MAP:
        clone = {}
        for key, value in source.items():
            if classifier.is_structural_key(key):
                clone[key] = copy.deepcopy(value)
            else:
                clone[key] = structural_clone(value, classifier)
        return clone
    if kind is NodeKind.LIST:
        return [structural_clone(item, classifier) for item in source]
    if isinstance(source, str) and not classifier.is_structural_value(source):
        return ''
    return source


def _copy_leaf(value: Any, classifier: FieldClassifier) -> bool:
    """Whether a non-container source value is copied verbatim by the overlay."""
    if isinstance(value, str):
        return is_blank(value) or classifier.is_structural_value(value)
    return node_kind(value) in (NodeKind.SCALAR, NodeKind.NULL)


def _needs_text_slot(current: Any) -> bool:
    """A target slot that does not hold text."""
    return not isinstance(current, str)


def _ensure_container(target: Any, slot, source_child: Any) -> Any:
    """Make target[slot] a container of the same kind as source_child."""
    source_kind = node_kind(source_child)
    current = target[slot]
    if node_kind(current) is not source_kind:
        current = empty_container(source_kind)
        target[slot] = current
    return current


def overlay_structural(source: Any, target: Any, classifier: FieldClassifier) -> Any:
    """
    Overwrite every structural field of target with the source value.

    Walks source recursively. Values under structural keys are deep-copied
    whole; structural values and non-text scalars are copied; missing or
    mistyped containers are recreated. Target lists are cut or padded to the
    source length and keys the source does not have are removed, so target
    ends up with the same containers and leaf addresses as source.
    Translatable text already in target is left alone.

    Args:
        source: Source document
        target: Target document, modified in place
        classifier: Field classifier

    Returns:
        target
    """
    kind = node_kind(source)
    if kind is NodeKind.MAP:
        for key in [key for key in target if key not in source]:
            del target[key]
        for key, value in source.items():
            if classifier.is_structural_key(key):
                target[key] = copy.deepcopy(value)
                continue
            value_kind = node_kind(value)
            if value_kind in (NodeKind.MAP, NodeKind.LIST):
                target.setdefault(key, None)
                overlay_structural(value, _ensure_container(target, key, value), classifier)
            elif _copy_leaf(value, classifier):
                target[key] = value
            elif key not in target or _needs_text_slot(target[key]):
                # Placeholder for text that translation or fallback fills
                target[key] = ''
    elif kind is NodeKind.LIST:
        del target[len(source):]
        while len(target) < len(source):
            target.append(None)
        for index, item in enumerate(source):
            item_kind = node_kind(item)
            if item_kind in (NodeKind.MAP, NodeKind.LIST):
                overlay_structural(item, _ensure_container(target, index, item), classifier)
            elif _copy_leaf(item, classifier):
                target[index] = item
            elif _needs_text_slot(target[index]):
                target[index] = ''
    return target


def write_back(target: Any, translations: Dict[LeafEntry, str]) -> int:
    """
    Write translated values at their original paths.

    Returns:
        Number of leaves written
    """
    for entry, text in translations.items():
        set_by_path(target, entry.path, text)
    return len(translations)


def apply_fallback(target: Any, entries: Iterable[LeafEntry]) -> int:
    """
    Keep existing target text, or copy the source text into blank slots.

    Returns:
        Number of slots filled from source
    """
    filled = 0
    for entry in entries:
        if is_blank(get_by_path(target, entry.path)):
            set_by_path(target, entry.path, entry.value)
            filled += 1
    return filled


def deep_merge(original: Any, generated: Any) -> Any:
    """
    Fold generated content into an original tree without losing user input.

    - None on either side yields the other side
    - a non-blank original string wins, a blank one is replaced
    - lists merge position by position; generated fills positions beyond
      the original's length
    - dicts merge key by key; keys only present in generated are kept

    Args:
        original: User-authored tree
        generated: Newly generated tree

    Returns:
        New merged tree; inputs are not modified
    """
    if original is None:
        return copy.deepcopy(generated)
    if generated is None:
        return copy.deepcopy(original)

    original_kind = node_kind(original)
    generated_kind = node_kind(generated)

    if isinstance(original, str):
        return original if original.strip() else copy.deepcopy(generated)

    if original_kind is NodeKind.LIST and generated_kind is NodeKind.LIST:
        merged = []
        for i in range(max(len(original), len(generated))):
            if i < len(original):
                merged.append(deep_merge(original[i], generated[i] if i < len(generated) else None))
            else:
                merged.append(copy.deepcopy(generated[i]))
        return merged

    if original_kind is NodeKind.MAP and generated_kind is NodeKind.MAP:
        merged = copy.deepcopy(generated)
        for key, value in original.items():
            merged[key] = deep_merge(value, generated.get(key))
        return merged

    return copy.deepcopy(original)
