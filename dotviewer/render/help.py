"""Help table content and the modal help popup renderer.

Rows are plain data shared with the session, which keeps them in a
navigable list so the popup can scroll.
"""

from __future__ import annotations

from .ansi import clip_ansi_line, pad_ansi_line

HELP_HEADER: tuple[str, str, str] = ("Key", "Mode", "Action")

HELP_ROWS: tuple[tuple[str, str, str], ...] = (
    ("q", "Normal, Popup", "quit"),
    ("/", "Normal", "fuzzy search node ids"),
    ("r", "Normal", "regex search node records"),
    (":", "Normal", "enter a command"),
    ("Esc", "Command, Search, Popup", "back to normal mode"),
    ("h / Left", "Normal", "focus the list to the left"),
    ("l / Right", "Normal", "focus the list to the right"),
    ("j / Down", "Normal", "move down in the focused list"),
    ("k / Up", "Normal", "move up in the focused list"),
    ("gg / G", "Normal", "first / last item of the focused list"),
    ("Enter", "Normal", "go to the focused predecessor or successor"),
    ("n / N", "Normal", "next / previous search match"),
    ("Tab / BackTab", "Normal", "next / previous tab"),
    ("c", "Normal", "close the current tab"),
    ("Tab", "Command, Search", "autocomplete"),
    ("Enter", "Search", "keep the match and leave search"),
    ("Enter", "Command", "run the command"),
    ("Enter", "Subgraph popup", "open the selected subgraph in a new tab"),
    (":filter <prefix>", "Command", "open a tab with ids starting with prefix"),
    (":neighbors <depth>", "Command", "export neighbors of the current node"),
    (":goto <id>", "Command", "jump to a node"),
    (":subgraph", "Command", "pick a subgraph to open"),
    (":export", "Command", "export the current tab"),
    (":xdot", "Command", "open the last export in xdot"),
    (":help", "Command", "show this help"),
)


def format_help_row(row: tuple[str, str, str], widths: tuple[int, int, int]) -> str:
    key, mode, action = row
    return f"{key:<{widths[0]}}  {mode:<{widths[1]}}  {action:<{widths[2]}}"


def help_column_widths() -> tuple[int, int, int]:
    rows = (HELP_HEADER, *HELP_ROWS)
    return (
        max(len(row[0]) for row in rows),
        max(len(row[1]) for row in rows),
        max(len(row[2]) for row in rows),
    )


def render_help_popup(
    selected: int | None,
    width: int,
    height: int,
    key_style: str = "\033[38;5;229m",
    border_style: str = "\033[38;5;45m",
) -> list[str]:
    """Return absolute-positioned ANSI chunks for a centered help modal."""
    out: list[str] = []
    modal_w = min(96, max(40, width - 6))
    modal_h = min(len(HELP_ROWS) + 4, max(8, height - 4))
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    body_rows = max(1, modal_h - 3)

    widths = help_column_widths()
    start = 0
    if selected is not None and selected >= body_rows:
        start = selected - body_rows + 1

    out.append(f"\033[{y + 1};{x + 1}H{border_style}╭{'─' * inner_w}╮\033[0m")
    header = clip_ansi_line(format_help_row(HELP_HEADER, widths), inner_w - 2)
    out.append(f"\033[{y + 2};{x + 1}H{border_style}│\033[0m \033[1m{pad_ansi_line(header, inner_w - 2)}\033[0m {border_style}│\033[0m")
    for i in range(body_rows):
        idx = start + i
        text = ""
        if idx < len(HELP_ROWS):
            text = clip_ansi_line(format_help_row(HELP_ROWS[idx], widths), inner_w - 2)
        line = pad_ansi_line(text, inner_w - 2)
        if idx == selected:
            line = f"\033[7m{line}\033[0m"
        else:
            line = f"{key_style}{line}\033[0m"
        out.append(f"\033[{y + 3 + i};{x + 1}H{border_style}│\033[0m {line} {border_style}│\033[0m")
    out.append(f"\033[{y + modal_h};{x + 1}H{border_style}╰{'─' * inner_w}╯\033[0m")
    return out
