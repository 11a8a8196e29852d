"""
A2UI value encodings.

Two tagged unions appear on the wire:

- Protocol values (``dataModelUpdate`` contents): valueString, valueNumber,
  valueBool, valueNull, valueList, valueMap
- Bound values (component properties): literalString, literalNumber,
  literalBool (and the ``literalBoolean``/``literal`` aliases), or a ``path``
  into the surface data model

Tags are detected by key presence, so 0, False and "" survive decoding.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from . import pointer

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for "no value produced" (distinct from a decoded null)."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class ValueTag(str, Enum):
    """Protocol value tags, in detection order."""
    STRING = "valueString"
    NUMBER = "valueNumber"
    BOOL = "valueBool"
    NULL = "valueNull"
    LIST = "valueList"
    MAP = "valueMap"


class BoundTag(str, Enum):
    """Bound value tags, in resolution order."""
    LITERAL_STRING = "literalString"
    LITERAL_NUMBER = "literalNumber"
    LITERAL_BOOL = "literalBool"
    LITERAL_BOOLEAN = "literalBoolean"
    LITERAL = "literal"
    PATH = "path"


def detect_value_tag(entry: Any) -> ValueTag | None:
    """Return the first protocol value tag present in entry."""
    if not isinstance(entry, Mapping):
        return None
    for tag in ValueTag:
        if tag.value in entry:
            return tag
    return None


def detect_bound_tag(value: Any) -> BoundTag | None:
    """
    Return the first bound value tag present in value.

    The untyped ``literal`` tag only counts when its value is not null.
    """
    if not isinstance(value, Mapping):
        return None
    for tag in BoundTag:
        if tag.value not in value:
            continue
        if tag is BoundTag.LITERAL and value[tag.value] is None:
            continue
        return tag
    return None


def decode_protocol_value(entry: Any) -> Any:
    """
    Decode a tagged protocol value into a native value.

    Args:
        entry: Mapping carrying one of the ValueTag keys

    Returns:
        Native value, or MISSING when no recognized tag is present
    """
    tag = detect_value_tag(entry)
    if tag is None:
        return MISSING

    raw = entry[tag.value]
    if tag is ValueTag.STRING or tag is ValueTag.NUMBER or tag is ValueTag.BOOL:
        return raw
    if tag is ValueTag.NULL:
        return None
    if tag is ValueTag.LIST:
        if not isinstance(raw, list):
            logger.warning(f"valueList must be an array, got {type(raw).__name__}")
            return MISSING
        items = []
        for item in raw:
            decoded = decode_protocol_value(item)
            items.append(None if decoded is MISSING else decoded)
        return items

    # ValueTag.MAP
    if not isinstance(raw, list):
        logger.warning(f"valueMap must be an array of entries, got {type(raw).__name__}")
        return MISSING
    result: dict[str, Any] = {}
    for item in raw:
        key = item.get("key") if isinstance(item, Mapping) else None
        if not isinstance(key, str):
            logger.warning(f"Skipping valueMap entry without a string key: {item!r}")
            continue
        decoded = decode_protocol_value(item)
        if decoded is MISSING:
            logger.debug(f"valueMap entry {key!r} carries no value tag")
            continue
        result[key] = decoded
    return result


def encode_protocol_value(value: Any) -> dict[str, Any]:
    """
    Encode a native value as a tagged protocol value.

    Raises:
        TypeError: If value is not JSON-like
    """
    if value is None:
        return {ValueTag.NULL.value: True}
    if isinstance(value, str):
        return {ValueTag.STRING.value: value}
    if isinstance(value, bool):
        return {ValueTag.BOOL.value: value}
    if isinstance(value, (int, float)):
        return {ValueTag.NUMBER.value: value}
    if isinstance(value, (list, tuple)):
        return {ValueTag.LIST.value: [encode_protocol_value(v) for v in value]}
    if isinstance(value, Mapping):
        return {
            ValueTag.MAP.value: [
                {"key": str(k), **encode_protocol_value(v)} for k, v in value.items()
            ]
        }
    raise TypeError(f"Cannot encode {type(value).__name__} as an A2UI value")


def encode_data_contents(data: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Build ``dataModelUpdate.contents`` entries from a native mapping."""
    return [{"key": str(k), **encode_protocol_value(v)} for k, v in data.items()]


def resolve_bound_value(value: Any, data_model: Any) -> Any:
    """
    Resolve a bound value against a data model.

    Non-mapping inputs are already literal and come back unchanged.
    Nothing is cached: call again whenever the data model changes.
    """
    if not isinstance(value, Mapping):
        return value

    tag = detect_bound_tag(value)
    if tag is None:
        return None
    if tag is BoundTag.PATH:
        return pointer.read(value[tag.value], data_model)
    return value[tag.value]


__all__ = [
    "MISSING",
    "ValueTag",
    "BoundTag",
    "detect_value_tag",
    "detect_bound_tag",
    "decode_protocol_value",
    "encode_protocol_value",
    "encode_data_contents",
    "resolve_bound_value",
]
