"""Partition/sort key query form."""

from __future__ import annotations

from dynamit.core.messages import QueryByKey
from dynamit.domains.store.types import KeySchema
from dynamit.shared.text_input import TextInput

UNSUPPORTED_TEXT = "We don't have support for this Table Definition."

PARTITION = "partition"
SORT = "sort"


class QueryForm:
    """Two inputs with independent carets; only one has focus at a time."""

    def __init__(self) -> None:
        self.schema = KeySchema()
        self.partition = TextInput()
        self.sort = TextInput()
        self.focus = PARTITION

    @property
    def supported(self) -> bool:
        return self.schema.supports_query

    @property
    def focused_input(self) -> TextInput:
        return self.sort if self.focus == SORT else self.partition

    def set_schema(self, schema: KeySchema) -> None:
        self.schema = schema
        self.clear()

    def clear(self) -> None:
        self.partition.clear()
        self.sort.clear()
        self.focus = PARTITION

    def toggle_focus(self) -> None:
        if self.schema.partition_key is None or self.schema.sort_key is None:
            return
        self.focus = PARTITION if self.focus == SORT else SORT

    def insert(self, character: str) -> None:
        if self.supported:
            self.focused_input.insert(character)

    def delete(self) -> None:
        if self.supported:
            self.focused_input.delete_before()

    def move_left(self) -> None:
        self.focused_input.move_left()

    def move_right(self) -> None:
        self.focused_input.move_right()

    def build_query(self, collection: str) -> QueryByKey | None:
        """Query for the typed values; None when no partition value was typed."""
        partition_key = self.schema.partition_key
        if partition_key is None or self.partition.is_empty:
            return None
        if self.schema.sort_key is not None and not self.sort.is_empty:
            return QueryByKey(
                collection=collection,
                partition_key=partition_key,
                partition_value=self.partition.text,
                sort_key=self.schema.sort_key,
                sort_value=self.sort.text,
            )
        return QueryByKey(collection=collection, partition_key=partition_key, partition_value=self.partition.text)

    def view_fields(self) -> list[tuple[str, str, int, bool]]:
        """(label, text, caret, focused) for each input the schema supports."""
        fields = []
        if self.schema.partition_key is not None:
            fields.append((self.schema.partition_key, self.partition.text, self.partition.caret, self.focus == PARTITION))
        if self.schema.sort_key is not None:
            fields.append((self.schema.sort_key, self.sort.text, self.sort.caret, self.focus == SORT))
        return fields
