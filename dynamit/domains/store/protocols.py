"""Narrow interface to the remote key-value store."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from dynamit.domains.store.types import Cursor

Item = dict[str, Any]


@dataclass(frozen=True)
class TableDescription:
    """Metadata reported by the store for one table."""

    name: str
    item_count: int = 0
    partition_key: str | None = None
    sort_key: str | None = None
    attribute_types: dict[str, str] = field(default_factory=dict)


class StoreClient(Protocol):
    """Low-level calls the fetch client builds on.

    Items are returned as plain Python values (already converted from the
    store's typed attribute format). Cursors are returned untouched.
    """

    region: str

    def list_tables(self, start_after: str | None = None) -> tuple[list[str], str | None]: ...

    def scan(
        self,
        table: str,
        limit: int,
        start_key: Cursor | None = None,
    ) -> tuple[list[Item], Cursor | None]: ...

    def describe_table(self, table: str) -> TableDescription: ...

    def query(self, table: str, conditions: Sequence[tuple[str, str]]) -> list[Item]: ...
