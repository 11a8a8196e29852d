"""
JSON Pointer (RFC 6901 subset) for surface data models.

Pointers address a location inside a nested mapping:

- ``""`` is the document root
- ``/user/name`` walks ``root["user"]["name"]``
- ``~1`` decodes to ``/`` and ``~0`` to ``~`` inside a segment

Lists are walked by decimal index. Malformed pointers never raise from
``read``/``assign``/``write``; they are logged and treated as "no value".
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from .error_codes import MalformedPathError

logger = logging.getLogger(__name__)

# Append marker for list targets
APPEND_SEGMENT = "-"


def escape_segment(segment: str) -> str:
    """Escape one reference token (``~`` first, then ``/``)."""
    return segment.replace("~", "~0").replace("/", "~1")


def unescape_segment(segment: str) -> str:
    """Decode one reference token. ``~1`` must be replaced before ``~0``."""
    return segment.replace("~1", "/").replace("~0", "~")


def split_pointer(path: Any) -> list[str]:
    """
    Split a pointer into decoded segments.

    Args:
        path: Pointer string

    Returns:
        Decoded segments ([] for the root pointer)

    Raises:
        MalformedPathError: If path is not a string, or is non-empty and
            does not start with '/'
    """
    if not isinstance(path, str):
        raise MalformedPathError(path)
    if path == "":
        return []
    if not path.startswith("/"):
        raise MalformedPathError(path)
    return [unescape_segment(token) for token in path[1:].split("/")]


def join_pointer(segments: Iterable[str]) -> str:
    """Build a pointer from raw (unescaped) segments."""
    return "".join("/" + escape_segment(str(segment)) for segment in segments)


def _list_index(segment: str, size: int, allow_end: bool = False) -> int | None:
    if not (segment.isascii() and segment.isdigit()):
        return None
    # RFC 6901: no leading zeros
    if len(segment) > 1 and segment.startswith("0"):
        return None
    index = int(segment)
    limit = size + 1 if allow_end else size
    if index >= limit:
        return None
    return index


def _step(current: Any, segment: str, missing: Any) -> Any:
    if isinstance(current, dict):
        return current.get(segment, missing)
    if isinstance(current, list):
        index = _list_index(segment, len(current))
        if index is None:
            return missing
        return current[index]
    return missing


def read(path: Any, root: Any, default: Any = None) -> Any:
    """
    Resolve a pointer against a data model.

    Args:
        path: Pointer string ("" for the root itself)
        root: Data model to walk
        default: Returned when the pointer is malformed or the location
            does not exist

    Returns:
        The addressed value, or default
    """
    try:
        segments = split_pointer(path)
    except MalformedPathError as e:
        logger.warning(f"Invalid data path: {e}")
        return default

    missing = object()
    current = root
    for segment in segments:
        if current is None:
            return default
        current = _step(current, segment, missing)
        if current is missing:
            return default
    return current


def assign(path: Any, value: Any, root: Any) -> bool:
    """
    Set the value at a pointer, creating intermediate mappings.

    Intermediate segments that are absent (or None) become empty dicts.
    A write that would need to pass through a scalar is dropped.

    Args:
        path: Pointer string (must address a location below the root)
        value: Value to store
        root: Mutable data model

    Returns:
        True if the value was stored
    """
    try:
        segments = split_pointer(path)
    except MalformedPathError as e:
        logger.warning(f"Invalid data path: {e}")
        return False

    if not segments:
        logger.warning("Cannot replace the data model root through a pointer write")
        return False

    current = root
    for segment in segments[:-1]:
        if isinstance(current, dict):
            child = current.get(segment)
            if child is None:
                child = {}
                current[segment] = child
            current = child
        elif isinstance(current, list):
            index = _list_index(segment, len(current))
            if index is None:
                logger.debug(f"Write to {path!r} aborted: no list index {segment!r}")
                return False
            child = current[index]
            if child is None:
                child = {}
                current[index] = child
            current = child
        else:
            logger.debug(f"Write to {path!r} aborted: {segment!r} is not a container")
            return False

    last = segments[-1]
    if isinstance(current, dict):
        current[last] = value
        return True

    if isinstance(current, list):
        if last == APPEND_SEGMENT:
            current.append(value)
            return True
        index = _list_index(last, len(current), allow_end=True)
        if index is None:
            logger.debug(f"Write to {path!r} aborted: no list index {last!r}")
            return False
        if index == len(current):
            current.append(value)
        else:
            current[index] = value
        return True

    logger.debug(f"Write to {path!r} aborted: parent is not a container")
    return False


def write(path: Any, value: Any, root: Any) -> Any:
    """Like ``assign``, but returns root so reads can be chained."""
    assign(path, value, root)
    return root


__all__ = [
    "APPEND_SEGMENT",
    "escape_segment",
    "unescape_segment",
    "split_pointer",
    "join_pointer",
    "read",
    "assign",
    "write",
]
