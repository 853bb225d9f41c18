"""Item filter and key query states."""

from __future__ import annotations

from dynamit.core.input_context import InputContext
from dynamit.core.modes import Mode
from dynamit.core.state_base import State


class RecordFilterState(State):
    """Typing into the item filter."""

    help_category = "Items"

    def _setup_actions(self) -> None:
        self.allows("submit_text", label="Apply", help="Keep the filter")
        self.allows("cancel_text", label="Clear", help="Clear the filter")
        self.allows("delete_character")
        self.allows("caret_left")
        self.allows("caret_right")

    def is_active(self, app: InputContext) -> bool:
        return app.mode == Mode.FILTER_RECORDS


class RecordQueryState(State):
    """Editing the partition/sort key query form."""

    help_category = "Query"

    def _setup_actions(self) -> None:
        self.allows("submit_text", lambda app: app.has_partition_key, label="Query", help="Run the key query")
        self.allows("cancel_text", label="Cancel", help="Close the query form")
        self.allows(
            "toggle_query_focus",
            lambda app: app.has_partition_key and app.has_sort_key,
            label="Switch",
            help="Switch between partition and sort key",
        )
        self.allows("delete_character", lambda app: app.has_partition_key)
        self.allows("caret_left", lambda app: app.has_partition_key)
        self.allows("caret_right", lambda app: app.has_partition_key)

    def is_active(self, app: InputContext) -> bool:
        return app.mode == Mode.QUERY_RECORDS
