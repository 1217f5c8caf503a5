"""Error taxonomy shared by the graph adapter, views, and session.

Core operations raise these; the session key entry point catches them and
records the message as the last result instead of letting them escape.
"""

from __future__ import annotations


class DotViewerError(Exception):
    """Base class for recoverable dotviewer errors."""

    label = "Error"

    def __str__(self) -> str:
        message = super().__str__()
        return f"{self.label}: {message}" if message else self.label


class NotFound(DotViewerError):
    """A goto/enter target (or adjacency query) names an unknown node."""

    label = "NotFound"


class NoMatch(DotViewerError):
    """A filter or subgraph derivation produced nothing."""

    label = "NoMatch"


class TabBoundary(DotViewerError):
    """Illegal tab operation, such as closing the root tab."""

    label = "TabBoundary"


class KeyUnhandled(DotViewerError):
    """No binding for a key in the current mode and focus."""

    label = "KeyUnhandled"

    def __init__(self, key: str) -> None:
        super().__init__(f"no binding for {key!r}")
        self.key = key


class CommandError(DotViewerError):
    """Command-mode input could not be parsed or lacks an argument."""

    label = "CommandError"


class ParseFailure(DotViewerError):
    """The graph description could not be read or parsed."""

    label = "ParseFailure"


class IOFailure(DotViewerError):
    """Export or external viewer launch failed."""

    label = "IOFailure"


__all__ = [
    "DotViewerError",
    "NotFound",
    "NoMatch",
    "TabBoundary",
    "KeyUnhandled",
    "CommandError",
    "ParseFailure",
    "IOFailure",
]
