"""Interactive modes of the explorer."""

from __future__ import annotations

from enum import Enum


class Mode(Enum):
    """The mode that owns keyboard input."""

    SELECT_COLLECTION = "select_collection"
    FILTER_COLLECTIONS = "filter_collections"
    SELECT_RECORD = "select_record"
    FILTER_RECORDS = "filter_records"
    QUERY_RECORDS = "query_records"
    VIEW_RECORD = "view_record"

    @property
    def is_text_entry(self) -> bool:
        """Text entry modes turn unbound printable keys into typed characters."""
        return self in (Mode.FILTER_COLLECTIONS, Mode.FILTER_RECORDS, Mode.QUERY_RECORDS)


MODE_LABELS: dict[Mode, str] = {
    Mode.SELECT_COLLECTION: "TABLES",
    Mode.FILTER_COLLECTIONS: "FILTER TABLES",
    Mode.SELECT_RECORD: "ITEMS",
    Mode.FILTER_RECORDS: "FILTER ITEMS",
    Mode.QUERY_RECORDS: "QUERY",
    Mode.VIEW_RECORD: "ITEM",
}
