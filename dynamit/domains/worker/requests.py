"""Requests accepted by the fetch worker and the responses it produces.

Every request and response carries the session generation it was issued in,
so the dispatcher can discard answers that belong to an earlier collection.
"""

from __future__ import annotations

from dataclasses import dataclass

from dynamit.domains.store.types import Cursor, KeySchema, PageResult


@dataclass(frozen=True)
class FetchRequest:
    session: int

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class ListCollections(FetchRequest):
    pass


@dataclass(frozen=True)
class ScanPage(FetchRequest):
    collection: str
    cursor: Cursor | None = None

    @property
    def continuation(self) -> bool:
        return self.cursor is not None


@dataclass(frozen=True)
class CountItems(FetchRequest):
    collection: str


@dataclass(frozen=True)
class DescribeKeys(FetchRequest):
    collection: str


@dataclass(frozen=True)
class QueryItems(FetchRequest):
    collection: str
    partition_key: str
    partition_value: str
    sort_key: str | None = None
    sort_value: str | None = None


@dataclass(frozen=True)
class FetchResponse:
    session: int


@dataclass(frozen=True)
class CollectionsFetched(FetchResponse):
    names: tuple[str, ...]


@dataclass(frozen=True)
class PageFetched(FetchResponse):
    collection: str
    page: PageResult
    continuation: bool = False


@dataclass(frozen=True)
class CountFetched(FetchResponse):
    collection: str
    count: int


@dataclass(frozen=True)
class KeysFetched(FetchResponse):
    collection: str
    schema: KeySchema


@dataclass(frozen=True)
class QueryFetched(FetchResponse):
    collection: str
    records: tuple[str, ...]


@dataclass(frozen=True)
class RequestFailed(FetchResponse):
    """The worker hit an unexpected error while serving a request."""

    kind: str
    error: str
