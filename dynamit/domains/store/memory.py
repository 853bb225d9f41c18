"""In-memory store for tests and mock mode."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from dynamit.domains.store.protocols import Item, TableDescription
from dynamit.domains.store.types import Cursor


class StoreUnavailableError(Exception):
    """Raised by InMemoryStore for operations configured to fail."""


@dataclass
class InMemoryTable:
    name: str
    items: list[Item] = field(default_factory=list)
    partition_key: str | None = "id"
    sort_key: str | None = None

    def key_of(self, item: Item) -> dict[str, Any]:
        key: dict[str, Any] = {}
        for name in (self.partition_key, self.sort_key):
            if name is not None:
                key[name] = item.get(name)
        return key


class InMemoryStore:
    """StoreClient backed by plain dicts.

    Scan cursors are the key attributes of the last returned item, like the
    store's own ``LastEvaluatedKey``. Every call is recorded in ``calls``;
    operations named in ``failing`` raise StoreUnavailableError.
    """

    def __init__(
        self,
        tables: Sequence[InMemoryTable] = (),
        *,
        region: str = "local",
        table_page_size: int = 100,
        failing: set[str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.region = region
        self.delay = delay
        self.table_page_size = table_page_size
        self.failing: set[str] = set(failing or ())
        self.calls: list[tuple[Any, ...]] = []
        self._tables: dict[str, InMemoryTable] = {table.name: table for table in tables}
        self._lock = threading.Lock()

    def add_table(self, table: InMemoryTable) -> None:
        self._tables[table.name] = table

    def _record(self, *call: Any) -> None:
        with self._lock:
            self.calls.append(call)
        if self.delay:
            time.sleep(self.delay)
        if call[0] in self.failing:
            raise StoreUnavailableError(f"{call[0]} is unavailable")

    def _table(self, name: str) -> InMemoryTable:
        table = self._tables.get(name)
        if table is None:
            raise StoreUnavailableError(f"Requested resource not found: {name}")
        return table

    def calls_for(self, operation: str) -> list[tuple[Any, ...]]:
        with self._lock:
            return [call for call in self.calls if call[0] == operation]

    def list_tables(self, start_after: str | None = None) -> tuple[list[str], str | None]:
        self._record("list_tables", start_after)
        names = sorted(self._tables)
        start = 0
        if start_after is not None:
            start = next((i + 1 for i, name in enumerate(names) if name == start_after), len(names))
        page = names[start : start + self.table_page_size]
        more = start + self.table_page_size < len(names)
        return page, (page[-1] if more and page else None)

    def scan(
        self,
        table: str,
        limit: int,
        start_key: Cursor | None = None,
    ) -> tuple[list[Item], Cursor | None]:
        self._record("scan", table, start_key)
        source = self._table(table)
        keyless = source.partition_key is None
        start = 0
        if start_key is not None:
            wanted = dict(start_key)
            if keyless:
                start = int(wanted.get("offset", len(source.items)))
            else:
                start = next(
                    (i + 1 for i, item in enumerate(source.items) if source.key_of(item) == wanted),
                    len(source.items),
                )
        page = [dict(item) for item in source.items[start : start + limit]]
        if start + limit >= len(source.items) or not page:
            return page, None
        if keyless:
            return page, {"offset": start + limit}
        return page, source.key_of(page[-1])

    def describe_table(self, table: str) -> TableDescription:
        self._record("describe_table", table)
        source = self._table(table)
        types = {name: "S" for name in (source.partition_key, source.sort_key) if name is not None}
        return TableDescription(
            name=table,
            item_count=len(source.items),
            partition_key=source.partition_key,
            sort_key=source.sort_key,
            attribute_types=types,
        )

    def query(self, table: str, conditions: Sequence[tuple[str, str]]) -> list[Item]:
        self._record("query", table, tuple(conditions))
        source = self._table(table)
        return [
            dict(item)
            for item in source.items
            if all(str(item.get(name)) == value for name, value in conditions)
        ]


def build_demo_store(rows: int = 250, *, region: str = "local", delay: float = 0.0) -> InMemoryStore:
    """Seed a store with a few tables for mock mode."""
    rows = max(rows, 1)
    users = InMemoryTable(
        name="users",
        items=[
            {
                "id": f"user-{i:04d}",
                "name": f"User {i}",
                "active": i % 3 != 0,
                "profile": {"age": 20 + i % 50, "tags": ["demo", f"group-{i % 5}"]},
            }
            for i in range(rows)
        ],
    )
    orders = InMemoryTable(
        name="orders",
        partition_key="customer",
        sort_key="order_id",
        items=[
            {
                "customer": f"user-{i % 20:04d}",
                "order_id": f"{i:06d}",
                "total": round(9.99 + i * 1.5, 2),
                "lines": [{"sku": f"sku-{i % 7}", "qty": 1 + i % 3}],
                "note": None,
            }
            for i in range(rows)
        ],
    )
    events = InMemoryTable(name="events", partition_key=None, items=[{"kind": "ping", "seq": i} for i in range(5)])
    return InMemoryStore([users, orders, events], region=region, delay=delay)
