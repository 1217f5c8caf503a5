"""Persistent JSON config helpers.

All access is defensive: a missing or malformed config falls back to
defaults for every key.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..search.engine import DEFAULT_CHUNK_SIZE

APP_NAME = "dotviewer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_EXPORT_DIR = Path("exports")
DEFAULT_VIEWER_COMMAND = "xdot"
DEFAULT_SEARCH_WORKERS = 4
DEFAULT_STYLE = "monokai"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings (config file values over built-in defaults)."""

    export_dir: Path = DEFAULT_EXPORT_DIR
    xdot_command: str = DEFAULT_VIEWER_COMMAND
    search_workers: int = DEFAULT_SEARCH_WORKERS
    search_chunk_size: int = DEFAULT_CHUNK_SIZE
    style: str = DEFAULT_STYLE


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _positive_int(value: object, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _text(value: object, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def load_settings(path: Path | None = None) -> Settings:
    """Build :class:`Settings`, ignoring any value of the wrong type."""
    data = load_config(path)
    return Settings(
        export_dir=Path(_text(data.get("export_dir"), str(DEFAULT_EXPORT_DIR))),
        xdot_command=_text(data.get("xdot_command"), DEFAULT_VIEWER_COMMAND),
        search_workers=_positive_int(data.get("search_workers"), DEFAULT_SEARCH_WORKERS),
        search_chunk_size=_positive_int(data.get("search_chunk_size"), DEFAULT_CHUNK_SIZE),
        style=_text(data.get("style"), DEFAULT_STYLE),
    )
