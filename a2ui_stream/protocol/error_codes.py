from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    MALFORMED_PATH = "MALFORMED_PATH"
    INVALID_JSON = "INVALID_JSON"
    AMBIGUOUS_MESSAGE = "AMBIGUOUS_MESSAGE"
    UNKNOWN_MESSAGE = "UNKNOWN_MESSAGE"
    MISSING_SURFACE_ID = "MISSING_SURFACE_ID"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"


class A2UIError(Exception):
    def __init__(self, message: str, error_code: ErrorCode, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": str(self),
            "details": self.details,
        }


class InvalidMessageError(A2UIError):
    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode = ErrorCode.INVALID_PAYLOAD,
        details: dict[str, Any] | None = None,
    ):
        msg = message or "Invalid message"
        super().__init__(msg, error_code, details)


class MalformedPathError(A2UIError):
    def __init__(self, path: Any, message: str | None = None):
        msg = message or f"Pointer must be empty or start with '/': {path!r}"
        super().__init__(msg, ErrorCode.MALFORMED_PATH, {"path": path})


__all__ = [
    "ErrorCode",
    "A2UIError",
    "InvalidMessageError",
    "MalformedPathError",
]
