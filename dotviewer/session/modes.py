"""Top-level session modes as tagged variants.

``Normal`` and ``Command`` carry no payload; ``Search`` and ``Popup`` carry the
sub-mode. Dispatch tables keyed on ``type(mode)`` must cover ``MODE_TYPES``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..search import SearchKind


class SearchMode(Enum):
    FUZZY = "fuzzy"
    REGEX = "regex"

    @property
    def kind(self) -> SearchKind:
        return SearchKind.FUZZY if self is SearchMode.FUZZY else SearchKind.REGEX


class PopupMode(Enum):
    TREE = "tree"
    HELP = "help"


@dataclass(frozen=True)
class Normal:
    pass


@dataclass(frozen=True)
class Command:
    pass


@dataclass(frozen=True)
class Search:
    smode: SearchMode


@dataclass(frozen=True)
class Popup:
    pmode: PopupMode


Mode = Normal | Command | Search | Popup
MODE_TYPES: tuple[type, ...] = (Normal, Command, Search, Popup)

NORMAL = Normal()
COMMAND = Command()


def mode_title(mode: Mode) -> str:
    """Short label for the input block header."""
    if isinstance(mode, Normal):
        return "Normal"
    if isinstance(mode, Command):
        return "Command"
    if isinstance(mode, Search):
        return "Fuzzy Search" if mode.smode is SearchMode.FUZZY else "Regex Search"
    if isinstance(mode, Popup):
        return "Subgraph" if mode.pmode is PopupMode.TREE else "Help"
    raise TypeError(f"unknown mode {mode!r}")
