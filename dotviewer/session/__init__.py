"""Session layer: tab stack, modes, commands, and key routing."""

from .app import Outcome, Session
from .commands import COMMAND_NAMES, ParsedCommand, parse_command
from .keys import MODE_HANDLERS, handle_key
from .modes import (
    COMMAND,
    MODE_TYPES,
    NORMAL,
    Command,
    Mode,
    Normal,
    Popup,
    PopupMode,
    Search,
    SearchMode,
    mode_title,
)

__all__ = [
    "COMMAND",
    "COMMAND_NAMES",
    "Command",
    "MODE_HANDLERS",
    "MODE_TYPES",
    "Mode",
    "NORMAL",
    "Normal",
    "Outcome",
    "ParsedCommand",
    "Popup",
    "PopupMode",
    "Search",
    "SearchMode",
    "Session",
    "handle_key",
    "mode_title",
    "parse_command",
]
