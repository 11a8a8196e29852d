"""
Stream ingestion: mode switch, JSONL reassembly, surface registry.
"""

from .dispatcher import MessageDispatcher
from .engine import DATA_WRITE_EVENT, IngestionEngine, StreamMode
from .line_buffer import LineReassembler
from .surface import Surface, SurfaceEvent, SurfaceRegistryView, SurfaceView

__all__ = [
    "DATA_WRITE_EVENT",
    "IngestionEngine",
    "LineReassembler",
    "MessageDispatcher",
    "StreamMode",
    "Surface",
    "SurfaceEvent",
    "SurfaceRegistryView",
    "SurfaceView",
]
