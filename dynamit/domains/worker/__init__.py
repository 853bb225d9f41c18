"""Fetch worker and its request/response channel types."""

from .requests import (
    CollectionsFetched,
    CountFetched,
    CountItems,
    DescribeKeys,
    FetchRequest,
    FetchResponse,
    KeysFetched,
    ListCollections,
    PageFetched,
    QueryFetched,
    QueryItems,
    RequestFailed,
    ScanPage,
)
from .worker import DEFAULT_QUEUE_SIZE, FetchWorker, create_channels, drain, submit

__all__ = [
    "DEFAULT_QUEUE_SIZE",
    "CollectionsFetched",
    "CountFetched",
    "CountItems",
    "DescribeKeys",
    "FetchRequest",
    "FetchResponse",
    "FetchWorker",
    "KeysFetched",
    "ListCollections",
    "PageFetched",
    "QueryFetched",
    "QueryItems",
    "RequestFailed",
    "ScanPage",
    "create_channels",
    "drain",
    "submit",
]
