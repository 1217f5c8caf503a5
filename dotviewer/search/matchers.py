"""Pure node-id matchers used by live search.

Each matcher maps ``(node_id, key, graph)`` to a :class:`Match` or ``None``
and touches nothing but its arguments, so candidates can be evaluated in any
order or concurrently.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from ..graph import GraphHandle


@dataclass(frozen=True)
class Match:
    """A matched node id plus character offsets to highlight."""

    id: str
    highlight: tuple[int, ...] = ()


Matcher = Callable[[str, str, "GraphHandle | None"], "Match | None"]


def fuzzy_indices(query: str, candidate: str) -> tuple[int, tuple[int, ...]] | None:
    """Return ``(score, offsets)`` when ``query`` is a subsequence of ``candidate``.

    Matching is smart-case: case-insensitive unless ``query`` contains an
    uppercase character. Consecutive runs and word-boundary hits score higher.
    """
    if not query:
        return 0, ()
    case_sensitive = query != query.lower()

    def fold(ch: str) -> str:
        return ch if case_sensitive else ch.lower()

    # Compare one character at a time so offsets always index ``candidate``,
    # even where lowercasing a character changes its length.
    score = 0
    prev_idx = -1
    run = 0
    offsets: list[int] = []
    for needle in map(fold, query):
        idx = next(
            (pos for pos in range(prev_idx + 1, len(candidate)) if fold(candidate[pos]) == needle),
            -1,
        )
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate[idx - 1] in "/_-. :":
            score += 35
        offsets.append(idx)
        prev_idx = idx

    score -= len(candidate) // 5
    return score, tuple(offsets)


def match_fuzzy(node_id: str, key: str, graph: GraphHandle | None = None) -> Match | None:
    found = fuzzy_indices(key, node_id)
    if found is None:
        return None
    return Match(node_id, found[1])


@lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except (re.error, OverflowError, RecursionError):
        return None


def match_regex(node_id: str, key: str, graph: GraphHandle | None = None) -> Match | None:
    """Search ``key`` in the node's serialized record; invalid patterns match nothing."""
    compiled = _compile(key)
    if compiled is None:
        return None
    record = graph.serialize_node(node_id) if graph is not None else node_id
    if compiled.search(record) is None:
        return None
    return Match(node_id)


def match_prefix(node_id: str, key: str, graph: GraphHandle | None = None) -> Match | None:
    if not node_id.startswith(key):
        return None
    return Match(node_id, tuple(range(len(key))))
