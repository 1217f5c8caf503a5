"""Incremental live search over one view's node list.

``matches`` holds the results for the current key and ``match_cache`` the
results for that key minus its last character. Typing refines the previous
match set; one backspace restores the cache for free and recomputes the cache
from the full node list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Executor
from enum import Enum
from functools import partial

from ..graph import GraphHandle
from ..model import AutocompleteTrie, NavigableList
from .matchers import Match, Matcher, match_fuzzy, match_prefix, match_regex

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 2048


class SearchKind(Enum):
    FUZZY = "fuzzy"
    REGEX = "regex"
    PREFIX = "prefix"


MATCHERS: dict[SearchKind, Matcher] = {
    SearchKind.FUZZY: match_fuzzy,
    SearchKind.REGEX: match_regex,
    SearchKind.PREFIX: match_prefix,
}


def _match_chunk(
    matcher: Matcher,
    key: str,
    graph: GraphHandle | None,
    node_ids: Sequence[str],
) -> list[Match]:
    out: list[Match] = []
    for node_id in node_ids:
        found = matcher(node_id, key, graph)
        if found is not None:
            out.append(found)
    return out


class SearchEngine:
    """Per-view search state: live matches, one-level cache, and completion trie."""

    def __init__(
        self,
        graph: GraphHandle,
        node_ids: Callable[[], list[str]],
        executor: Executor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.graph = graph
        self._node_ids = node_ids
        self.executor = executor
        self.chunk_size = max(1, chunk_size)
        self.matches: NavigableList[Match] = NavigableList()
        self.match_cache: NavigableList[Match] = NavigableList()
        self.trie = AutocompleteTrie(node_ids())
        self.key = ""
        self.cache_key: str | None = None

    def reset(self) -> None:
        """Forget the live key and both match lists."""
        self.matches = NavigableList()
        self.match_cache = NavigableList()
        self.key = ""
        self.cache_key = None

    def run(self, kind: SearchKind, candidates: Sequence[str], key: str) -> list[Match]:
        """Apply the ``kind`` matcher to ``candidates``, preserving candidate order.

        Large candidate sets are split into chunks and fanned out to the
        executor; ``Executor.map`` yields chunk results in submission order.
        """
        matcher = MATCHERS[kind]
        graph = self.graph if kind is SearchKind.REGEX else None
        if self.executor is None or len(candidates) <= self.chunk_size:
            return _match_chunk(matcher, key, graph, candidates)
        chunks = [
            candidates[start : start + self.chunk_size]
            for start in range(0, len(candidates), self.chunk_size)
        ]
        worker = partial(_match_chunk, matcher, key, graph)
        out: list[Match] = []
        for chunk_matches in self.executor.map(worker, chunks):
            out.extend(chunk_matches)
        return out

    def update(self, kind: SearchKind, key: str) -> None:
        """Bring ``matches`` in line with ``key`` and rebuild the trie."""
        if key == self.key and self.matches.items:
            return
        if key.startswith(self.key) and len(key) > len(self.key):
            self._forward(kind, key)
        elif self.cache_key is not None and key == self.cache_key:
            self._backward(kind, key)
        else:
            self._recompute(kind, key)
        self.key = key
        self.update_trie()
        logger.debug("search %s %r -> %d matches", kind.value, key, len(self.matches))

    def _forward(self, kind: SearchKind, key: str) -> None:
        if self.key:
            previous = list(self.matches.items)
        else:
            previous = [Match(node_id) for node_id in self._node_ids()]
        self.match_cache = NavigableList(previous)
        self.cache_key = self.key
        refined = self.run(kind, [match.id for match in previous], key)
        self.matches = NavigableList(refined)

    def _backward(self, kind: SearchKind, key: str) -> None:
        self.matches = NavigableList(self.match_cache.items)
        self._recompute_cache(kind, key)

    def _recompute(self, kind: SearchKind, key: str) -> None:
        self.matches = NavigableList(self.run(kind, self._node_ids(), key))
        self._recompute_cache(kind, key)

    def _recompute_cache(self, kind: SearchKind, key: str) -> None:
        if not key:
            self.match_cache = NavigableList()
            self.cache_key = None
            return
        shorter = key[:-1]
        self.match_cache = NavigableList(self.run(kind, self._node_ids(), shorter))
        self.cache_key = shorter

    def update_trie(self) -> None:
        self.trie = AutocompleteTrie(match.id for match in self.matches.items)

    def autocomplete(self, key: str) -> str | None:
        return self.trie.autocomplete(key)

    def complete_prefix(self, prefix: str) -> str | None:
        """Complete ``prefix`` against every node id without touching live state."""
        found = self.run(SearchKind.PREFIX, self._node_ids(), prefix)
        return AutocompleteTrie(match.id for match in found).autocomplete(prefix)

    def matched_id(self) -> str | None:
        match = self.matches.selected()
        return match.id if match is not None else None
