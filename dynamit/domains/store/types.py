"""Value types returned by the fetch client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Store-defined resume key, threaded through verbatim and never interpreted.
Cursor = Mapping[str, Any]


@dataclass(frozen=True)
class PageResult:
    """A single bounded page of records plus the cursor for the next page.

    Attributes:
        items: Records of this page, as JSON display strings
        next_cursor: Cursor for the next page (None if no more pages)
    """

    items: tuple[str, ...] = ()
    next_cursor: Cursor | None = None

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available."""
        return self.next_cursor is not None

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class KeySchema:
    """Key attribute names of a collection; None where the key is absent."""

    partition_key: str | None = None
    sort_key: str | None = None

    @property
    def supports_query(self) -> bool:
        return self.partition_key is not None
