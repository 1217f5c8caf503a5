"""Command-mode grammar and its completion dictionary."""

from __future__ import annotations

from dataclasses import dataclass

COMMAND_NAMES: tuple[str, ...] = (
    "filter",
    "neighbors",
    "goto",
    "subgraph",
    "export",
    "xdot",
    "help",
)

COMMANDS_WITH_ARGUMENT = frozenset({"filter", "neighbors", "goto"})


@dataclass(frozen=True)
class ParsedCommand:
    """Command word and optional argument; ``name`` is ``None`` for unknown words."""

    name: str | None
    word: str
    argument: str | None = None


def parse_command(text: str) -> ParsedCommand:
    parts = text.strip().split(maxsplit=1)
    if not parts:
        return ParsedCommand(name=None, word="")
    word = parts[0]
    argument = parts[1].strip() if len(parts) > 1 else None
    name = word if word in COMMAND_NAMES else None
    return ParsedCommand(name=name, word=word, argument=argument or None)
