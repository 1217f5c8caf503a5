"""Prefix dictionary used for node-id and command completion.

The trie is built once from a snapshot and never mutated afterwards; callers
rebuild it wholesale whenever the backing dictionary changes.
"""

from __future__ import annotations

from collections.abc import Iterable

_TERMINAL = ""


class AutocompleteTrie:
    """Character trie supporting membership, predictive search, and completion."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self.items: list[str] = []
        self._root: dict[str, dict] = {}
        seen: set[str] = set()
        for word in words:
            if word in seen:
                continue
            seen.add(word)
            self.items.append(word)
            node = self._root
            for ch in word:
                node = node.setdefault(ch, {})
            node[_TERMINAL] = {}

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._walk(word)
        return node is not None and _TERMINAL in node

    def _walk(self, prefix: str) -> dict[str, dict] | None:
        node = self._root
        for ch in prefix:
            child = node.get(ch)
            if child is None:
                return None
            node = child
        return node

    def predict(self, prefix: str) -> list[str]:
        """Return every stored word that starts with ``prefix``, in sorted order."""
        node = self._walk(prefix)
        if node is None:
            return []
        out: list[str] = []
        stack: list[tuple[str, dict[str, dict]]] = [(prefix, node)]
        while stack:
            word, current = stack.pop()
            if _TERMINAL in current:
                out.append(word)
            for ch in sorted((key for key in current if key != _TERMINAL), reverse=True):
                stack.append((word + ch, current[ch]))
        return out

    def autocomplete(self, prefix: str) -> str | None:
        """Return the longest common prefix of all words extending ``prefix``.

        An empty ``prefix`` considers the whole dictionary. Returns ``None`` when
        no word qualifies.
        """
        candidates = list(self.items) if not prefix else self.predict(prefix)
        return longest_common_prefix(candidates)


def longest_common_prefix(words: list[str]) -> str | None:
    """Compare every word against the first one until the first mismatch."""
    if not words:
        return None
    first = words[0]
    for idx, ch in enumerate(first):
        for other in words[1:]:
            if idx >= len(other) or other[idx] != ch:
                return first[:idx]
    return first
