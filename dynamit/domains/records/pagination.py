"""Lazy loading of further pages as the selection nears the end of the buffer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from dynamit.domains.store.types import Cursor

PROXIMITY_ROWS = 5


@dataclass
class PaginationController:
    """Raw record buffer of one collection session plus its page flags.

    ``fetch_in_flight`` is set when a continuation request is issued and
    cleared when its page (or its drop) is observed; no second continuation is
    requested while it is set. A continuation needs a cursor from an earlier
    page, so nothing is requested before the first page arrives.
    """

    collection: str | None = None
    records: list[str] = field(default_factory=list)
    cursor: Cursor | None = None
    has_more: bool = True
    fetch_in_flight: bool = False
    loaded: bool = False

    def reset(self, collection: str | None) -> None:
        self.collection = collection
        self.records = []
        self.cursor = None
        self.has_more = True
        self.fetch_in_flight = False
        self.loaded = False

    def first_page(self, records: Sequence[str], cursor: Cursor | None) -> None:
        self.records = list(records)
        self.cursor = cursor
        self.has_more = cursor is not None
        self.fetch_in_flight = False
        self.loaded = True

    def continuation(self, records: Sequence[str], cursor: Cursor | None) -> None:
        self.records.extend(records)
        self.cursor = cursor
        self.has_more = cursor is not None
        self.fetch_in_flight = False

    def replace(self, records: Sequence[str]) -> None:
        """Swap in records that have no further pages (key query results)."""
        self.records = list(records)
        self.cursor = None
        self.has_more = False
        self.fetch_in_flight = False
        self.loaded = True

    def dropped(self) -> None:
        self.fetch_in_flight = False

    def can_load_more(self) -> bool:
        return self.loaded and self.has_more and not self.fetch_in_flight and self.cursor is not None

    def near_end(self, selected: int | None) -> bool:
        if selected is None:
            return False
        return selected >= len(self.records) - PROXIMITY_ROWS

    def request_more(self, selected: int | None, *, force: bool = False) -> Cursor | None:
        """Cursor to continue from, if a continuation should be requested now.

        ``force`` skips the proximity check (jumping to the last row).
        Returning a cursor marks the fetch as in flight.
        """
        if not self.can_load_more():
            return None
        if not force and not self.near_end(selected):
            return None
        self.fetch_in_flight = True
        return self.cursor
