"""File logging setup; the terminal itself is busy in raw mode."""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / "dotviewer.log"


def configure_logging(log_file: Path | None = None, level: int = logging.INFO) -> Path:
    """Attach a file handler to the ``dotviewer`` logger and return its path."""
    target = log_file if log_file is not None else DEFAULT_LOG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("dotviewer")
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return target
