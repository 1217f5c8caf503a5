"""Frame renderer for the graph explorer.

Reads session state and returns one fully composed ANSI frame; nothing here
mutates the session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..search import Match
from ..session.modes import Command, Popup, PopupMode, Search, mode_title
from ..view import Focus
from .ansi import clip_ansi_line, pad_ansi_line
from .help import render_help_popup
from .syntax import highlight_record, sanitize_terminal_text
from .tree import render_tree_popup

if TYPE_CHECKING:
    from ..model import NavigableList
    from ..session import Session

RESET = "\033[0m"
REVERSE = "\033[7m"
BOLD = "\033[1m"
DIM = "\033[2m"
MATCH_STYLE = "\033[1;38;5;214m"
ERROR_STYLE = "\033[38;5;203m"
OK_STYLE = "\033[38;5;114m"
TAB_ACTIVE_STYLE = "\033[1;30;48;5;45m"
FOCUS_HEADER_STYLE = "\033[1;38;5;45m"

# Rows reserved outside the column body: tab bar, headers, preview, input, status.
_CHROME_ROWS = 5


def _window_start(selected: int | None, total: int, rows: int) -> int:
    if selected is None or total <= rows:
        return 0
    return max(0, min(selected - rows // 2, total - rows))


def highlight_match(match: Match) -> str:
    """Render a match id with its highlighted offsets emphasized."""
    marks = set(match.highlight)
    text = sanitize_terminal_text(match.id)
    if not marks or text != match.id:
        return text
    return "".join(f"{MATCH_STYLE}{ch}{RESET}" if i in marks else ch for i, ch in enumerate(text))


def _column(items: list[str], selected: int | None, focused: bool, width: int, rows: int) -> list[str]:
    start = _window_start(selected, len(items), rows)
    out: list[str] = []
    for offset in range(rows):
        idx = start + offset
        text = items[idx] if idx < len(items) else ""
        cell = pad_ansi_line(text, width)
        if idx == selected and idx < len(items):
            cell = f"{REVERSE if focused else BOLD}{cell}{RESET}"
        out.append(cell)
    return out


def _id_column(ids: NavigableList[str], focused: bool, width: int, rows: int) -> list[str]:
    return _column([sanitize_terminal_text(i) for i in ids.items], ids.index, focused, width, rows)


def render_tab_bar(session: Session, width: int) -> str:
    chunks: list[str] = []
    for idx, view in enumerate(session.tabs.tabs):
        label = f" {idx + 1}:{sanitize_terminal_text(view.title)} "
        chunks.append(f"{TAB_ACTIVE_STYLE}{label}{RESET}" if idx == session.tabs.active else label)
    return pad_ansi_line("".join(chunks), width)


def render_status(session: Session, width: int) -> str:
    result = session.result
    if not result.message:
        return pad_ansi_line("", width)
    style = OK_STYLE if result.ok else ERROR_STYLE
    return f"{style}{pad_ansi_line(sanitize_terminal_text(result.message), width)}{RESET}"


def render_input(session: Session, width: int) -> str:
    mode = session.mode
    view = session.view
    title = mode_title(mode)
    if isinstance(mode, Search):
        progress = view.progress_matches()
    else:
        progress = view.progress_current()
    prompt = f"{BOLD}{title}{RESET} "
    if isinstance(mode, (Command, Search)):
        buffer = session.input
        text = sanitize_terminal_text(buffer.key)
        cursor = min(buffer.cursor, len(text))
        under = text[cursor] if cursor < len(text) else " "
        prompt += f"{text[:cursor]}{REVERSE}{under}{RESET}{text[cursor + 1:]}"
    left_width = max(1, width - len(progress) - 1)
    return f"{pad_ansi_line(prompt, left_width)} {DIM}{clip_ansi_line(progress, width - left_width - 1)}{RESET}"


def render_frame(session: Session, width: int, height: int, style: str = "monokai") -> str:
    """Compose one frame for a ``width`` x ``height`` terminal."""
    width = max(20, width)
    height = max(_CHROME_ROWS + 1, height)
    view = session.view
    body_rows = height - _CHROME_ROWS
    side_w = max(8, width // 4)
    mid_w = max(8, width - 2 * side_w - 2)

    headers = (
        ("Predecessors", Focus.PREV, side_w),
        ("Matches" if isinstance(session.mode, Search) else "Nodes", Focus.CURRENT, mid_w),
        ("Successors", Focus.NEXT, side_w),
    )
    header_cells = []
    for label, focus, cell_w in headers:
        cell = pad_ansi_line(label, cell_w)
        header_cells.append(f"{FOCUS_HEADER_STYLE}{cell}{RESET}" if view.focus is focus else f"{DIM}{cell}{RESET}")

    prev_col = _id_column(view.prevs, view.focus is Focus.PREV, side_w, body_rows)
    next_col = _id_column(view.nexts, view.focus is Focus.NEXT, side_w, body_rows)
    if isinstance(session.mode, Search):
        matches = view.matches
        mid_col = _column(
            [highlight_match(m) for m in matches.items],
            matches.index,
            True,
            mid_w,
            body_rows,
        )
    else:
        mid_col = _id_column(view.current, view.focus is Focus.CURRENT, mid_w, body_rows)

    lines = [render_tab_bar(session, width), "│".join(header_cells)]
    for row in range(body_rows):
        lines.append(f"{prev_col[row]}│{mid_col[row]}│{next_col[row]}")
    record = view.record()
    lines.append(pad_ansi_line(highlight_record(record, style) if record else "", width))
    lines.append(render_input(session, width))
    lines.append(render_status(session, width))

    frame = ["\033[H"]
    for idx, line in enumerate(lines):
        frame.append(f"\033[{idx + 1};1H{line}{RESET}\033[K")

    mode = session.mode
    if isinstance(mode, Popup):
        if mode.pmode is PopupMode.TREE:
            frame.extend(render_tree_popup(view.subtree, width, height))
        else:
            frame.extend(render_help_popup(session.help.index, width, height))
    return "".join(frame)


__all__ = ["highlight_match", "render_frame", "render_input", "render_status", "render_tab_bar"]
