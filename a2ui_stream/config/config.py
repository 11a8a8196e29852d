"""
Stream configuration

Provides the tunables of the ingestion engine.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any

logger = logging.getLogger(__name__)

# Marker an agent emits between its free-text preamble and the JSONL body
DEFAULT_DELIMITER = "---a2ui_JSON---"


@dataclass
class StreamConfig:
    """
    Ingestion engine configuration

    Controls:
    - The text -> structured mode switch marker
    - JSONL line separator
    """
    # Mode switch
    delimiter: str = DEFAULT_DELIMITER

    # JSONL framing
    line_separator: str = "\n"

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ValueError("delimiter must not be empty")
        if not self.line_separator:
            raise ValueError("line_separator must not be empty")

    @classmethod
    def default(cls) -> "StreamConfig":
        """Create default configuration"""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StreamConfig":
        """Build from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = [k for k in data if k not in known]
        if unknown:
            logger.warning(f"Ignoring unknown stream config keys: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
