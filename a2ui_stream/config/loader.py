"""Configuration loader for a2ui-stream.

Loads configuration from a JSON file and environment variables:
- ${ENV_VAR} substitution inside string values
- A2UI_STREAM_DELIMITER overrides the mode switch marker
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

from .config import StreamConfig

logger = logging.getLogger(__name__)

DELIMITER_ENV = "A2UI_STREAM_DELIMITER"

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _substitute_env_vars(obj: Any) -> Any:
    """Recursively replace ${VAR} with os.environ values (unset vars are left as-is)."""
    if isinstance(obj, str):

        def _replace(m: re.Match) -> str:
            var = m.group(1)
            return os.environ.get(var, m.group(0))

        return _ENV_VAR_RE.sub(_replace, obj)
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(v) for v in obj]
    return obj


def get_config_path() -> Path:
    """Get the path to the active configuration file.

    Searches well-known locations. If no file is found, returns the default
    user-level path (``~/.a2ui-stream/config.json``) even if it does not exist.
    """
    candidates = [
        Path.cwd() / "a2ui-stream.json",
        Path.home() / ".a2ui-stream" / "config.json",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return Path.home() / ".a2ui-stream" / "config.json"


def load_config_raw(path: Path) -> dict[str, Any]:
    """Load a config file with env-var substitution."""
    obj = json.loads(path.read_text(encoding="utf-8"))
    obj = _substitute_env_vars(obj)
    return obj if isinstance(obj, dict) else {}


def load_config(config_path: Optional[str | Path] = None) -> StreamConfig:
    """Load stream configuration.

    Args:
        config_path: Optional path to a JSON config file. Searches the
            well-known locations when omitted.

    Returns:
        StreamConfig (defaults when the file is missing or invalid)
    """
    path = Path(config_path) if config_path else get_config_path()
    config_dict: dict[str, Any] = {}

    if path.exists():
        try:
            config_dict = load_config_raw(path)
            logger.debug(f"Loaded stream config from {path}")
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to load config from {path}: {exc}")

    delimiter = os.environ.get(DELIMITER_ENV)
    if delimiter:
        config_dict["delimiter"] = delimiter

    try:
        return StreamConfig.from_dict(config_dict)
    except (TypeError, ValueError) as exc:
        logger.warning(f"Failed to parse config: {exc}")
        return StreamConfig.default()
