"""
A2UI Protocol (v0.8) server-to-client messages.

Each JSONL line is a single-key object whose key names the message kind:

    {"surfaceUpdate": {"surfaceId": "main", "components": [...]}}
    {"dataModelUpdate": {"surfaceId": "main", "contents": [...]}}
    {"beginRendering": {"surfaceId": "main", "root": "root-column"}}
    {"deleteSurface": {"surfaceId": "main"}}
"""
from __future__ import annotations

import json
from typing import Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .error_codes import ErrorCode, InvalidMessageError
from .values import MISSING, decode_protocol_value


# Supported message kinds
A2UI_MESSAGE_KINDS = [
    "surfaceUpdate",
    "dataModelUpdate",
    "beginRendering",
    "deleteSurface",
]

# v0.9 kinds that are recognized only to give a clearer rejection
UNSUPPORTED_MESSAGE_KINDS = [
    "createSurface",
]


class ComponentEntry(BaseModel):
    """One component definition keyed by id. The definition itself is opaque."""
    id: str
    component: dict[str, Any]

    model_config = ConfigDict(extra="ignore")


class DataEntry(BaseModel):
    """One ``dataModelUpdate`` entry: a key plus one protocol value tag."""
    key: str

    model_config = ConfigDict(extra="allow")

    def decode(self) -> Any:
        """Decoded native value, or MISSING if the entry carries no value tag."""
        return decode_protocol_value(self.model_extra or {})


class _Message(BaseModel):
    kind: ClassVar[str] = ""

    surfaceId: str

    model_config = ConfigDict(extra="allow")

    def to_wire(self) -> dict[str, Any]:
        """Single-key wire form of this message."""
        return {self.kind: self.model_dump()}

    def to_jsonl(self) -> str:
        return json.dumps(self.to_wire(), separators=(",", ":")) + "\n"


class SurfaceUpdate(_Message):
    """Define or replace components on a surface."""
    kind: ClassVar[str] = "surfaceUpdate"

    components: list[ComponentEntry] = Field(default_factory=list)


class DataModelUpdate(_Message):
    """Replace top-level keys of a surface's data model."""
    kind: ClassVar[str] = "dataModelUpdate"

    contents: list[DataEntry] = Field(default_factory=list)


class BeginRendering(_Message):
    """Mark a surface live and point it at its root component."""
    kind: ClassVar[str] = "beginRendering"

    root: str


class DeleteSurface(_Message):
    """Remove a surface."""
    kind: ClassVar[str] = "deleteSurface"


A2UIMessage = Union[SurfaceUpdate, DataModelUpdate, BeginRendering, DeleteSurface]

MESSAGE_TYPES: dict[str, type[_Message]] = {
    SurfaceUpdate.kind: SurfaceUpdate,
    DataModelUpdate.kind: DataModelUpdate,
    BeginRendering.kind: BeginRendering,
    DeleteSurface.kind: DeleteSurface,
}


def parse_message(obj: Any) -> A2UIMessage:
    """
    Parse one decoded JSONL object into a typed message.

    Args:
        obj: Decoded JSON value

    Returns:
        SurfaceUpdate | DataModelUpdate | BeginRendering | DeleteSurface

    Raises:
        InvalidMessageError: If the object is not exactly one recognized
            message kind with a payload carrying a surfaceId
    """
    if not isinstance(obj, dict):
        raise InvalidMessageError(
            f"Message must be an object, got {type(obj).__name__}",
            ErrorCode.INVALID_PAYLOAD,
        )

    if len(obj) != 1:
        raise InvalidMessageError(
            f"Message must have exactly one top-level key, got {len(obj)}",
            ErrorCode.AMBIGUOUS_MESSAGE,
            {"keys": list(obj)},
        )

    kind, payload = next(iter(obj.items()))

    if kind in UNSUPPORTED_MESSAGE_KINDS:
        raise InvalidMessageError(
            f"{kind} (v0.9) not supported, use v0.8",
            ErrorCode.UNKNOWN_MESSAGE,
            {"kind": kind},
        )

    model = MESSAGE_TYPES.get(kind)
    if model is None:
        raise InvalidMessageError(
            f"Invalid message type: {kind}",
            ErrorCode.UNKNOWN_MESSAGE,
            {"kind": kind},
        )

    surface_id = payload.get("surfaceId") if isinstance(payload, dict) else None
    if not isinstance(surface_id, str) or not surface_id:
        raise InvalidMessageError(
            f"Missing surfaceId in {kind}",
            ErrorCode.MISSING_SURFACE_ID,
            {"kind": kind},
        )

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidMessageError(
            f"Invalid {kind} payload for surface {surface_id}: {e.error_count()} error(s)",
            ErrorCode.INVALID_PAYLOAD,
            {"kind": kind, "surfaceId": surface_id, "errors": e.errors(include_url=False)},
        ) from e


def validate_jsonl(jsonl: str) -> tuple[bool, list[str]]:
    """
    Validate an A2UI JSONL body.

    Rules:
    - Each non-blank line must be valid JSON
    - Each line must be exactly one v0.8 message kind
    - Each payload must carry a surfaceId and match its kind's shape
    - dataModelUpdate entries must carry a value tag

    Args:
        jsonl: JSONL string to validate

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = []

    for i, line in enumerate(jsonl.split("\n"), 1):
        if not line.strip():
            continue

        try:
            obj = json.loads(line)
        except (json.JSONDecodeError, RecursionError) as e:
            errors.append(f"Line {i}: Invalid JSON - {e}")
            continue

        try:
            message = parse_message(obj)
        except InvalidMessageError as e:
            errors.append(f"Line {i}: {e}")
            continue

        if isinstance(message, DataModelUpdate):
            for entry in message.contents:
                if entry.decode() is MISSING:
                    errors.append(f"Line {i}: dataModelUpdate entry '{entry.key}' has no value")

    return (len(errors) == 0, errors)


__all__ = [
    "A2UI_MESSAGE_KINDS",
    "UNSUPPORTED_MESSAGE_KINDS",
    "ComponentEntry",
    "DataEntry",
    "SurfaceUpdate",
    "DataModelUpdate",
    "BeginRendering",
    "DeleteSurface",
    "A2UIMessage",
    "MESSAGE_TYPES",
    "parse_message",
    "validate_jsonl",
]
