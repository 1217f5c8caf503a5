"""Collapsible cluster tree used by the subgraph popup."""

from __future__ import annotations

from dataclasses import dataclass

from ..graph.types import SubgraphNode
from .navigable import NavigableList


@dataclass(frozen=True)
class SubtreeEntry:
    """One visible row of the flattened cluster tree."""

    name: str
    depth: int
    has_children: bool


class SubgraphTree:
    """Flattened view over a :class:`SubgraphNode` hierarchy with a selection."""

    def __init__(self, root: SubgraphNode) -> None:
        self.root = root
        self.expanded: set[str] = {root.name}
        self.entries: NavigableList[SubtreeEntry] = NavigableList()
        self._rebuild()

    def _rebuild(self, preferred: str | None = None) -> None:
        rows: list[SubtreeEntry] = []

        def visit(node: SubgraphNode, depth: int) -> None:
            rows.append(SubtreeEntry(node.name, depth, bool(node.children)))
            if node.name in self.expanded:
                for child in node.children:
                    visit(child, depth + 1)

        visit(self.root, 0)
        self.entries = NavigableList(rows)
        if preferred is not None:
            for idx, entry in enumerate(rows):
                if entry.name == preferred:
                    self.entries.select(idx)
                    break

    def selected(self) -> str | None:
        entry = self.entries.selected()
        return entry.name if entry is not None else None

    def up(self) -> None:
        self.entries.previous()

    def down(self) -> None:
        self.entries.next()

    def right(self) -> None:
        """Expand the selected row, or step into its first child when already open."""
        entry = self.entries.selected()
        if entry is None or not entry.has_children:
            return
        if entry.name not in self.expanded:
            self.expanded.add(entry.name)
            self._rebuild(preferred=entry.name)
            return
        index = self.entries.index
        if index is not None:
            self.entries.select(index + 1)

    def left(self) -> None:
        """Collapse the selected row, or move to its parent row."""
        entry = self.entries.selected()
        if entry is None:
            return
        if entry.has_children and entry.name in self.expanded and entry.depth > 0:
            self.expanded.discard(entry.name)
            self._rebuild(preferred=entry.name)
            return
        idx = (self.entries.index or 0) - 1
        while idx >= 0:
            if self.entries.items[idx].depth < entry.depth:
                self.entries.select(idx)
                return
            idx -= 1
