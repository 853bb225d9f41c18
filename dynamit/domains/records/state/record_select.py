"""Item list focused state."""

from __future__ import annotations

from dynamit.core.input_context import InputContext
from dynamit.core.modes import Mode
from dynamit.core.state_base import State


class RecordSelectState(State):
    """Item list has the keyboard."""

    help_category = "Items"

    def _setup_actions(self) -> None:
        def has_records(app: InputContext) -> bool:
            return app.has_records

        def has_record_selected(app: InputContext) -> bool:
            return app.has_record_selected

        self.allows("open_record", has_record_selected, label="View", help="View the highlighted item")
        self.allows("filter_records", label="Filter", help="Filter loaded items")
        self.allows("query_records", label="Query", help="Query by partition/sort key")
        self.allows(
            "clear_record_filter",
            lambda app: app.record_filter_active,
            label="Clear",
            help="Clear filter and query",
        )
        self.allows("copy_record", has_record_selected, label="Copy", help="Copy the highlighted item")
        self.allows("back_to_collections", label="Tables", help="Back to the table list")
        self.allows("select_next", has_records)
        self.allows("select_previous", has_records)
        self.allows("select_first", has_records)
        self.allows("select_last", has_records)
        self.allows("scroll_down", has_records, help="Page down")
        self.allows("scroll_up", has_records, help="Page up")

    def is_active(self, app: InputContext) -> bool:
        return app.mode == Mode.SELECT_RECORD
