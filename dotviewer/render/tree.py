"""Subgraph tree popup renderer."""

from __future__ import annotations

from ..model import SubgraphTree
from .ansi import clip_ansi_line, pad_ansi_line

TREE_TITLE = " Subgraphs "


def render_tree_popup(
    tree: SubgraphTree,
    width: int,
    height: int,
    selected_style: str = "\033[7m",
    border_style: str = "\033[38;5;45m",
) -> list[str]:
    """Return absolute-positioned ANSI chunks for the cluster picker."""
    out: list[str] = []
    rows = tree.entries.items
    modal_w = min(72, max(30, width - 10))
    modal_h = min(len(rows) + 2, max(5, height - 4))
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    body_rows = max(1, modal_h - 2)

    selected = tree.entries.index
    start = 0
    if selected is not None and selected >= body_rows:
        start = selected - body_rows + 1

    title = clip_ansi_line(TREE_TITLE, inner_w)
    out.append(f"\033[{y + 1};{x + 1}H{border_style}╭{title}{'─' * (inner_w - len(title))}╮\033[0m")
    for i in range(body_rows):
        idx = start + i
        body = ""
        style = ""
        if idx < len(rows):
            entry = rows[idx]
            if entry.has_children:
                marker = "▾ " if entry.name in tree.expanded else "▸ "
            else:
                marker = "  "
            body = f"{'  ' * entry.depth}{marker}{entry.name}"
            if idx == selected:
                style = selected_style
        line = pad_ansi_line(body, inner_w)
        out.append(f"\033[{y + 2 + i};{x + 1}H{border_style}│\033[0m{style}{line}\033[0m{border_style}│\033[0m")
    out.append(f"\033[{y + modal_h};{x + 1}H{border_style}╰{'─' * inner_w}╯\033[0m")
    return out
