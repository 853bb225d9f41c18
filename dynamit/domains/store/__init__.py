"""Store access: value types, the fetch client and store clients."""

from .client import DEFAULT_PAGE_SIZE, FetchClient, record_to_json
from .memory import InMemoryStore, InMemoryTable, StoreUnavailableError, build_demo_store
from .protocols import StoreClient, TableDescription
from .types import Cursor, KeySchema, PageResult

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Cursor",
    "FetchClient",
    "InMemoryStore",
    "InMemoryTable",
    "KeySchema",
    "PageResult",
    "StoreClient",
    "StoreUnavailableError",
    "TableDescription",
    "build_demo_store",
    "record_to_json",
]
