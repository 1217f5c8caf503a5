"""Selection-tracking ordered sequence shared by every list in the UI."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class NavigableList(Generic[T]):
    """Ordered items plus at most one selected index.

    The selected index is ``None`` exactly when the list is empty; otherwise it
    always names a valid position. Every operation is total.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self.items: list[T] = list(items)
        self.index: int | None = 0 if self.items else None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"NavigableList({self.items!r}, index={self.index!r})"

    def next(self) -> None:
        """Select the following item, wrapping from last to first."""
        if not self.items:
            return
        if self.index is None or self.index >= len(self.items) - 1:
            self.index = 0
        else:
            self.index += 1

    def previous(self) -> None:
        """Select the preceding item, wrapping from first to last."""
        if not self.items:
            return
        if self.index is None:
            self.index = 0
        elif self.index == 0:
            self.index = len(self.items) - 1
        else:
            self.index -= 1

    def first(self) -> None:
        if self.items:
            self.index = 0

    def last(self) -> None:
        if self.items:
            self.index = len(self.items) - 1

    def select(self, index: int) -> None:
        """Select ``index``; out-of-range values are ignored."""
        if 0 <= index < len(self.items):
            self.index = index

    def selected(self) -> T | None:
        if self.index is None:
            return None
        return self.items[self.index]

    def find(self, item: T) -> int | None:
        """Return the first index whose item equals ``item``."""
        for idx, candidate in enumerate(self.items):
            if candidate == item:
                return idx
        return None
