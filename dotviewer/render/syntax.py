"""Node-record highlighting with Pygments' Graphviz lexer.

Pygments is imported lazily on first use so startup stays fast; when it is
unavailable, or the style is unknown, records are shown uncolored.
"""

from __future__ import annotations

import re

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_FORMATTERS: dict[str, object] = {}


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes so attribute values cannot move the cursor."""
    return _CONTROL_RE.sub(lambda m: f"\\x{ord(m.group(0)):02x}", text)


def _ensure_pygments_loaded() -> bool:
    """Lazily import and cache Pygments callables.

    Returns whether Pygments is available in the runtime environment.
    """
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import Terminal256Formatter
        from pygments.lexers import get_lexer_by_name
    except ImportError:
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_LEXER = get_lexer_by_name("graphviz")
    _PYGMENTS_TERMINAL_FORMATTER = Terminal256Formatter
    _PYGMENTS_AVAILABLE = True
    return True


def _formatter_for_style(style: str):
    """Return cached terminal formatter for ``style``, or ``None`` if unknown."""
    if style in _PYGMENTS_FORMATTERS:
        return _PYGMENTS_FORMATTERS[style]
    from pygments.util import ClassNotFound

    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    try:
        formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    except ClassNotFound:
        formatter = None
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def highlight_record(record: str, style: str = "monokai") -> str:
    """Colorize one serialized node statement; plain text on any fallback."""
    record = sanitize_terminal_text(record)
    if not _ensure_pygments_loaded():
        return record
    formatter = _formatter_for_style(style)
    if formatter is None:
        return record
    assert _PYGMENTS_HIGHLIGHT is not None
    return _PYGMENTS_HIGHLIGHT(record, _PYGMENTS_LEXER, formatter).rstrip("\n")
