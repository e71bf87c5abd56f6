"""
Document tree primitives.

A document is a JSON-like tree of dicts, lists, scalars and None. Every
traversal here dispatches on NodeKind so unsupported values fail loudly
instead of being silently skipped.

Field paths are tuples of segments (str = map key, int = list index) and are
persisted as strings such as ``causes[0].title``.
"""
import hashlib
from enum import Enum
from typing import Any, Iterator, List, Optional

from .models import FieldPath, LeafEntry

_ESCAPED_CHARS = ('\\', '.', '[', ']')


class NodeKind(Enum):
    """Variants of a document node."""
    MAP = 'map'
    LIST = 'list'
    SCALAR = 'scalar'
    NULL = 'null'


def node_kind(value: Any) -> NodeKind:
    """
    Classify a document node.

    Raises:
        TypeError: If value is not a JSON-compatible node
    """
    if value is None:
        return NodeKind.NULL
    if isinstance(value, dict):
        return NodeKind.MAP
    if isinstance(value, list):
        return NodeKind.LIST
    if isinstance(value, (str, int, float, bool)):
        return NodeKind.SCALAR
    raise TypeError(f"Unsupported document node type: {type(value).__name__}")


def empty_container(kind: NodeKind):
    """Return a fresh empty container for a MAP or LIST kind."""
    if kind is NodeKind.MAP:
        return {}
    if kind is NodeKind.LIST:
        return []
    raise ValueError(f"{kind} is not a container kind")


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def content_hash(text: str) -> str:
    """Deterministic fingerprint of the trimmed text."""
    return hashlib.sha256(text.strip().encode('utf-8')).hexdigest()


# ─── Paths ─────────────────────────────────────────────────────────

def _escape_key(key: str) -> str:
    for char in _ESCAPED_CHARS:
        key = key.replace(char, '\\' + char)
    return key


def format_path(path: FieldPath) -> str:
    """
    Render a field path as a string.

    Args:
        path: Tuple of map keys (str) and list indices (int)

    Returns:
        Path string, e.g. ``workPackages[1].tasks[0].title``
    """
    parts = []
    for segment in path:
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            raise TypeError(f"Invalid path segment: {segment!r}")
        if isinstance(segment, int):
            parts.append(f'[{segment}]')
        else:
            # An empty first key is written as a leading '.'
            if parts or not segment:
                parts.append('.')
            parts.append(_escape_key(segment))
    return ''.join(parts)


def parse_path(path_string: str) -> FieldPath:
    """
    Parse a path string produced by format_path.

    Raises:
        ValueError: If the string is malformed
    """
    segments = []
    key_chars = []
    in_key = False
    i = 0
    length = len(path_string)

    def finish_key():
        segments.append(''.join(key_chars))
        key_chars.clear()

    while i < length:
        char = path_string[i]
        if char == '\\':
            if i + 1 >= length:
                raise ValueError(f"Dangling escape in path: {path_string!r}")
            key_chars.append(path_string[i + 1])
            in_key = True
            i += 2
            continue
        if char == '[':
            if in_key:
                finish_key()
                in_key = False
            end = path_string.find(']', i)
            digits = path_string[i + 1:end] if end != -1 else ''
            if not digits.isdigit():
                raise ValueError(f"Invalid list index in path: {path_string!r}")
            segments.append(int(digits))
            i = end + 1
            if i < length and path_string[i] not in '.[':
                raise ValueError(f"Unexpected character after index in path: {path_string!r}")
            if i < length and path_string[i] == '.':
                i += 1
                in_key = True
            continue
        if char == '.':
            if i > 0:
                finish_key()
            in_key = True
            i += 1
            continue
        if char == ']':
            raise ValueError(f"Unbalanced ']' in path: {path_string!r}")
        key_chars.append(char)
        in_key = True
        i += 1

    if in_key or key_chars:
        finish_key()
    return tuple(segments)


# ─── Get / set ─────────────────────────────────────────────────────

def get_by_path(document: Any, path: FieldPath) -> Optional[Any]:
    """Read the value at path, or None if any step is missing."""
    current = document
    for segment in path:
        kind = node_kind(current)
        if isinstance(segment, int) and kind is NodeKind.LIST:
            if segment >= len(current):
                return None
            current = current[segment]
        elif isinstance(segment, str) and kind is NodeKind.MAP:
            if segment not in current:
                return None
            current = current[segment]
        else:
            return None
    return current


def _container_for(segment) -> Any:
    return [] if isinstance(segment, int) else {}


def _fits(container: Any, segment) -> bool:
    if isinstance(segment, int):
        return isinstance(container, list)
    return isinstance(container, dict)


def _put(container: Any, segment, value: Any):
    if isinstance(segment, int):
        while len(container) <= segment:
            container.append(None)
    container[segment] = value


def set_by_path(document: Any, path: FieldPath, value: Any) -> None:
    """
    Write value at path, creating intermediate containers on demand.

    The shape of each created container (list vs dict) is inferred from the
    segment that follows it. Lists are padded with None.

    Raises:
        ValueError: If path is empty
        TypeError: If document cannot hold the first segment
    """
    if not path:
        raise ValueError("Cannot set a value at the empty path")
    if not _fits(document, path[0]):
        raise TypeError(
            f"Document of type {type(document).__name__} cannot be addressed by {path[0]!r}"
        )

    current = document
    for segment, next_segment in zip(path[:-1], path[1:]):
        child = get_by_path(current, (segment,))
        if not _fits(child, next_segment):
            child = _container_for(next_segment)
            _put(current, segment, child)
        current = child
    _put(current, path[-1], value)


# ─── Path Indexer ──────────────────────────────────────────────────

def iter_leaves(document: Any, prefix: FieldPath = ()) -> Iterator[LeafEntry]:
    """Depth-first generator behind index_leaves."""
    kind = node_kind(document)
    if kind is NodeKind.MAP:
        for key, value in document.items():
            yield from iter_leaves(value, prefix + (key,))
    elif kind is NodeKind.LIST:
        for index, item in enumerate(document):
            yield from iter_leaves(item, prefix + (index,))
    elif kind is NodeKind.SCALAR:
        # Numbers and booleans are never translation candidates
        if isinstance(document, str) and not isinstance(document, bool):
            text = document.strip()
            if text:
                yield LeafEntry(path=prefix, value=text, content_hash=content_hash(text))


def index_leaves(document: Any) -> List[LeafEntry]:
    """
    Collect every non-blank text leaf of a document.

    Args:
        document: Document tree

    Returns:
        Leaf entries in depth-first order (map insertion order, list order)
    """
    return list(iter_leaves(document))
