"""One tab: a graph snapshot with focus-scoped navigable lists and live search."""

from __future__ import annotations

from concurrent.futures import Executor
from enum import Enum

from .errors import NoMatch, NotFound
from .graph import GraphHandle
from .model import AutocompleteTrie, NavigableList, SubgraphTree
from .search import Match, SearchEngine, SearchKind
from .search.engine import DEFAULT_CHUNK_SIZE


class Focus(Enum):
    """Which list receives vertical movement; rotates Current -> Prev -> Next."""

    CURRENT = "current"
    PREV = "prev"
    NEXT = "next"

    def right(self) -> Focus:
        return _FOCUS_RING[(_FOCUS_RING.index(self) + 1) % len(_FOCUS_RING)]

    def left(self) -> Focus:
        return _FOCUS_RING[(_FOCUS_RING.index(self) - 1) % len(_FOCUS_RING)]


_FOCUS_RING: tuple[Focus, ...] = (Focus.CURRENT, Focus.PREV, Focus.NEXT)


class View:
    """Navigable perspective over one (possibly derived) graph handle.

    ``prevs`` and ``nexts`` are replaced, never mutated, each time the
    selection in ``current`` changes.
    """

    def __init__(
        self,
        title: str,
        graph: GraphHandle,
        executor: Executor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.title = title
        self.graph = graph
        self.focus = Focus.CURRENT
        self.current: NavigableList[str] = NavigableList(graph.node_ids())
        self.prevs: NavigableList[str] = NavigableList()
        self.nexts: NavigableList[str] = NavigableList()
        self.search = SearchEngine(graph, lambda: self.current.items, executor, chunk_size)
        self.subtree = SubgraphTree(graph.subgraph_tree())
        self.update_adjacent()

    @property
    def matches(self) -> NavigableList[Match]:
        return self.search.matches

    @property
    def match_cache(self) -> NavigableList[Match]:
        return self.search.match_cache

    @property
    def trie(self) -> AutocompleteTrie:
        return self.search.trie

    def current_id(self) -> str | None:
        return self.current.selected()

    def matched_id(self) -> str | None:
        return self.search.matched_id()

    def _spawn(self, title: str, graph: GraphHandle) -> View:
        return View(title, graph, executor=self.search.executor, chunk_size=self.search.chunk_size)

    # adjacency

    def update_adjacent(self) -> None:
        """Recompute predecessor/successor lists for the selected node."""
        node_id = self.current_id()
        if node_id is None:
            self.prevs = NavigableList()
            self.nexts = NavigableList()
            return
        self.prevs = NavigableList(self.graph.predecessors(node_id))
        self.nexts = NavigableList(self.graph.successors(node_id))

    def goto(self, node_id: str) -> None:
        idx = self.current.find(node_id)
        if idx is None:
            raise NotFound(f"no such node {node_id!r}")
        self.current.select(idx)
        self.update_adjacent()

    def goto_match(self) -> None:
        """Jump to the selected match; leave ``current`` alone when nothing matched."""
        node_id = self.matched_id()
        if node_id is None:
            return
        self.goto(node_id)

    def goto_adjacent(self) -> None:
        focused = self.prevs if self.focus is Focus.PREV else self.nexts
        node_id = focused.selected()
        if node_id is None:
            raise NotFound("no node selected")
        self.goto(node_id)

    # focus-scoped movement

    def _focused(self) -> NavigableList[str]:
        if self.focus is Focus.PREV:
            return self.prevs
        if self.focus is Focus.NEXT:
            return self.nexts
        return self.current

    def _move(self, action: str) -> None:
        focused = self._focused()
        getattr(focused, action)()
        if self.focus is Focus.CURRENT:
            self.update_adjacent()

    def up(self) -> None:
        self._move("previous")

    def down(self) -> None:
        self._move("next")

    def first(self) -> None:
        self._move("first")

    def last(self) -> None:
        self._move("last")

    def right(self) -> None:
        self.focus = self.focus.right()

    def left(self) -> None:
        self.focus = self.focus.left()

    def enter(self) -> None:
        if self.focus is Focus.CURRENT:
            return
        self.goto_adjacent()

    # derivations

    def filter(self, prefix: str) -> View:
        """Build a new view restricted to ids starting with ``prefix``."""
        graph = self.graph.filter(prefix)
        if graph is None:
            raise NoMatch(f"no match for prefix {prefix}")
        return self._spawn(f"{self.title} - {prefix}", graph)

    def subgraph(self) -> View:
        """Build a new view from the cluster selected in the subgraph tree."""
        key = self.subtree.selected()
        if key is None:
            raise NoMatch("no subgraph selected")
        graph = self.graph.subgraph(key)
        if graph is None or graph.is_empty():
            raise NoMatch("empty graph")
        return self._spawn(key, graph)

    def neighbors(self, depth: int) -> GraphHandle:
        node_id = self.current_id()
        if node_id is None:
            raise NotFound("no node selected")
        graph = self.graph.bounded_neighbors(node_id, depth)
        if graph.is_empty():
            raise NoMatch("empty graph")
        return graph

    # search

    def update_search(self, kind: SearchKind, key: str) -> None:
        self.search.update(kind, key)
        self.goto_match()

    def clear_search(self) -> None:
        self.search.reset()
        self.prevs = NavigableList()
        self.nexts = NavigableList()

    def autocomplete(self, key: str) -> str | None:
        return self.search.autocomplete(key)

    def record(self) -> str | None:
        """Serialized DOT statement of the selected node, for previews."""
        node_id = self.current_id()
        if node_id is None:
            return None
        return self.graph.serialize_node(node_id)

    def progress_current(self) -> str:
        return _progress(self.current.index, len(self.current)) or "Empty"

    def progress_matches(self) -> str:
        return _progress(self.matches.index, len(self.matches)) or "No Match..."


def _progress(idx: int | None, total: int) -> str | None:
    if idx is None or total == 0:
        return None
    percentage = (idx / total) * 100
    return f"[{idx + 1} / {total} ({percentage:.3f}%)]"
