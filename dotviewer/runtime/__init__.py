"""Runtime wiring: terminal, event loop, config, and logging."""

from .config import CONFIG_PATH, Settings, load_config, load_settings
from .logs import configure_logging
from .loop import run_main_loop
from .terminal import TerminalController

__all__ = [
    "CONFIG_PATH",
    "Settings",
    "TerminalController",
    "configure_logging",
    "load_config",
    "load_settings",
    "run_main_loop",
]
