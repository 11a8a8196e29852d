"""
a2ui-stream - incremental A2UI surface ingestion.

Turns an agent's mixed text/JSONL token stream into live UI surfaces.
"""

from .actions import UserAction, build_user_action
from .config import StreamConfig, load_config
from .protocol import pointer
from .protocol.values import decode_protocol_value, encode_protocol_value, resolve_bound_value
from .stream import IngestionEngine, LineReassembler, MessageDispatcher, StreamMode, Surface, SurfaceEvent

__version__ = "0.1.0"

__all__ = [
    "IngestionEngine",
    "LineReassembler",
    "MessageDispatcher",
    "StreamConfig",
    "StreamMode",
    "Surface",
    "SurfaceEvent",
    "UserAction",
    "build_user_action",
    "decode_protocol_value",
    "encode_protocol_value",
    "load_config",
    "pointer",
    "resolve_bound_value",
]
