"""Cursor-paginated fetch client over a StoreClient."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from dynamit.domains.store.protocols import Item, StoreClient
from dynamit.domains.store.types import Cursor, KeySchema, PageResult
from dynamit.shared.core.debug_events import emit_debug_event

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100

ResultT = TypeVar("ResultT")


def record_to_json(item: Item) -> str:
    """Serialize one record to its display string."""
    return json.dumps(item, ensure_ascii=False, default=str)


@dataclass
class FetchClient:
    """Store access used by the fetch worker.

    Every operation collapses store failures to an empty or zero result. The
    failure is logged and recorded as a ``store.error`` debug event.
    """

    store: StoreClient
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def region(self) -> str:
        return getattr(self.store, "region", "")

    def _run(self, operation: str, fn: Callable[[], ResultT], fallback: ResultT, **context: Any) -> ResultT:
        try:
            return fn()
        except Exception as exc:
            logger.warning("Store %s failed: %s", operation, exc, exc_info=True)
            emit_debug_event(
                "store.error",
                category="store",
                operation=operation,
                error=str(exc),
                **context,
            )
            return fallback

    def list_collections(self) -> list[str]:
        """List every collection, following continuation tokens until none remain."""

        def load() -> list[str]:
            names: list[str] = []
            start_after: str | None = None
            while True:
                page, start_after = self.store.list_tables(start_after)
                names.extend(page)
                if start_after is None:
                    return names

        names = self._run("list_tables", load, [])
        emit_debug_event("store.list_collections", category="store", count=len(names))
        return names

    def scan_page(self, collection: str, cursor: Cursor | None = None) -> PageResult:
        """Fetch one bounded page, resuming after ``cursor`` when given."""

        def load() -> PageResult:
            items, next_cursor = self.store.scan(collection, self.page_size, cursor)
            return PageResult(
                items=tuple(record_to_json(item) for item in items),
                next_cursor=next_cursor,
            )

        page = self._run("scan", load, PageResult(), collection=collection)
        emit_debug_event(
            "store.scan_page",
            category="store",
            collection=collection,
            resumed=cursor is not None,
            count=page.count,
            has_more=page.has_more,
        )
        return page

    def approximate_count(self, collection: str) -> int:
        """Item count as reported by the store metadata (possibly stale)."""
        return self._run(
            "describe_table",
            lambda: self.store.describe_table(collection).item_count,
            0,
            collection=collection,
        )

    def key_schema(self, collection: str) -> KeySchema:
        def load() -> KeySchema:
            description = self.store.describe_table(collection)
            return KeySchema(partition_key=description.partition_key, sort_key=description.sort_key)

        return self._run("describe_table", load, KeySchema(), collection=collection)

    def query_by_key(
        self,
        collection: str,
        partition_key: str,
        partition_value: str,
        sort_key: str | None = None,
        sort_value: str | None = None,
    ) -> list[str]:
        """Equality query on the partition key, and the sort key when given.

        A single request, never paginated.
        """
        conditions = [(partition_key, partition_value)]
        if sort_key is not None and sort_value is not None:
            conditions.append((sort_key, sort_value))

        def load() -> list[str]:
            return [record_to_json(item) for item in self.store.query(collection, conditions)]

        records = self._run("query", load, [], collection=collection)
        emit_debug_event(
            "store.query_by_key",
            category="store",
            collection=collection,
            keys=len(conditions),
            count=len(records),
        )
        return records
