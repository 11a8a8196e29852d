"""
A2UI protocol layer: value codec, JSON pointers, message models.
"""

from .error_codes import A2UIError, ErrorCode, InvalidMessageError, MalformedPathError
from .messages import (
    A2UI_MESSAGE_KINDS,
    A2UIMessage,
    BeginRendering,
    DataModelUpdate,
    DeleteSurface,
    SurfaceUpdate,
    parse_message,
    validate_jsonl,
)
from .values import MISSING, decode_protocol_value, encode_protocol_value, resolve_bound_value

__all__ = [
    "A2UIError",
    "ErrorCode",
    "InvalidMessageError",
    "MalformedPathError",
    "A2UI_MESSAGE_KINDS",
    "A2UIMessage",
    "BeginRendering",
    "DataModelUpdate",
    "DeleteSurface",
    "SurfaceUpdate",
    "parse_message",
    "validate_jsonl",
    "MISSING",
    "decode_protocol_value",
    "encode_protocol_value",
    "resolve_bound_value",
]
