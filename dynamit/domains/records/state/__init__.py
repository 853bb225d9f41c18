"""Item list key state exports."""

from .record_filter import RecordFilterState, RecordQueryState
from .record_select import RecordSelectState

__all__ = [
    "RecordFilterState",
    "RecordQueryState",
    "RecordSelectState",
]
