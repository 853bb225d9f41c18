"""Single selection over a list whose length changes under it."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

PAGE_ROWS = 5


@dataclass
class Selection:
    """Selected index into a view plus the scrollbar position that follows it.

    Every operation takes the current view length; the index always ends up
    either None or within ``[0, length)``.
    """

    selected: int | None = None
    scroll_position: int = 0

    def _select(self, index: int | None, length: int) -> int | None:
        if index is None or length <= 0:
            self.selected = None
            return None
        self.selected = max(0, min(index, length - 1))
        self.scroll_position = self.selected
        return self.selected

    def select(self, index: int, length: int) -> int | None:
        return self._select(index, length)

    def next(self, length: int) -> int | None:
        if self.selected is None:
            return self._select(0, length)
        return self._select(self.selected + 1, length)

    def previous(self, length: int) -> int | None:
        if self.selected is None:
            return self._select(length - 1, length)
        return self._select(self.selected - 1, length)

    def first(self, length: int) -> int | None:
        return self._select(0, length)

    def last(self, length: int) -> int | None:
        return self._select(length - 1, length)

    def scroll_down(self, length: int, rows: int = PAGE_ROWS) -> int | None:
        return self._select((self.selected or 0) + rows, length)

    def scroll_up(self, length: int, rows: int = PAGE_ROWS) -> int | None:
        return self._select((self.selected or 0) - rows, length)

    def select_none(self) -> None:
        self.selected = None
        self.scroll_position = 0

    def clamp(self, length: int) -> int | None:
        """Keep the current index valid after the view shrank or grew."""
        if self.selected is None:
            return None
        return self._select(self.selected, length)

    def reset(self, length: int) -> int | None:
        """The view was replaced: select its first row, if any."""
        self.scroll_position = 0
        return self._select(0, length)

    def value(self, items: Sequence[T]) -> T | None:
        if self.selected is None or not 0 <= self.selected < len(items):
            return None
        return items[self.selected]
