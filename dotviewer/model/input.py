"""Single-line editable input with a cursor, used by Command and Search modes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InputBuffer:
    key: str = ""
    cursor: int = 0

    def clear(self) -> None:
        self.key = ""
        self.cursor = 0

    def set(self, text: str) -> None:
        self.key = text
        self.cursor = len(text)

    def insert(self, ch: str) -> None:
        self.key = self.key[: self.cursor] + ch + self.key[self.cursor :]
        self.cursor += len(ch)

    def delete(self) -> bool:
        """Remove the character before the cursor; return whether text changed."""
        if self.cursor == 0:
            return False
        self.key = self.key[: self.cursor - 1] + self.key[self.cursor :]
        self.cursor -= 1
        return True

    def front(self) -> None:
        """Move the cursor one position right."""
        self.cursor = min(len(self.key), self.cursor + 1)

    def back(self) -> None:
        """Move the cursor one position left."""
        self.cursor = max(0, self.cursor - 1)
