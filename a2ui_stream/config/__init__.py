"""Configuration for a2ui-stream."""

from .config import DEFAULT_DELIMITER, StreamConfig
from .loader import get_config_path, load_config

__all__ = [
    "DEFAULT_DELIMITER",
    "StreamConfig",
    "get_config_path",
    "load_config",
]
