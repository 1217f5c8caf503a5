"""Ordered tab stack with an explicit bounded active index."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from ..errors import TabBoundary

T = TypeVar("T")


class TabStack(Generic[T]):
    """Never-empty sequence of tabs; index 0 is the protected root tab."""

    def __init__(self, tabs: Iterable[T]) -> None:
        self.tabs: list[T] = list(tabs)
        if not self.tabs:
            raise TabBoundary("no tab given to tab stack constructor")
        self.active = 0

    def __len__(self) -> int:
        return len(self.tabs)

    def __iter__(self) -> Iterator[T]:
        return iter(self.tabs)

    def selected(self) -> T:
        return self.tabs[self.active]

    def open(self, tab: T) -> None:
        """Push ``tab`` and make it active."""
        self.tabs.append(tab)
        self.active = len(self.tabs) - 1

    def close(self) -> None:
        """Remove the active tab and activate the one that preceded it."""
        if self.active == 0:
            raise TabBoundary("cannot close the root tab")
        del self.tabs[self.active]
        self.active = max(0, min(self.active - 1, len(self.tabs) - 1))

    def next(self) -> None:
        self.active = 0 if self.active >= len(self.tabs) - 1 else self.active + 1

    def previous(self) -> None:
        self.active = len(self.tabs) - 1 if self.active == 0 else self.active - 1

    def select(self, index: int) -> None:
        if 0 <= index < len(self.tabs):
            self.active = index
