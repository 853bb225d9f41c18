"""Table list key state exports."""

from .collection_select import CollectionFilterState, CollectionSelectState

__all__ = [
    "CollectionFilterState",
    "CollectionSelectState",
]
