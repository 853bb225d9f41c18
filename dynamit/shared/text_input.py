"""Single-line text buffer with a character-indexed caret."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TextInput:
    text: str = ""
    caret: int = 0

    def insert(self, character: str) -> None:
        self.text = self.text[: self.caret] + character + self.text[self.caret :]
        self.caret += len(character)

    def delete_before(self) -> bool:
        """Backspace. Returns False when the caret is already leftmost."""
        if self.caret == 0:
            return False
        self.text = self.text[: self.caret - 1] + self.text[self.caret :]
        self.caret -= 1
        return True

    def move_left(self) -> None:
        self.caret = max(0, self.caret - 1)

    def move_right(self) -> None:
        self.caret = min(len(self.text), self.caret + 1)

    def clear(self) -> None:
        self.text = ""
        self.caret = 0

    @property
    def is_empty(self) -> bool:
        return not self.text
