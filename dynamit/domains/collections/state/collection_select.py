"""Table list states."""

from __future__ import annotations

from dynamit.core.input_context import InputContext
from dynamit.core.modes import Mode
from dynamit.core.state_base import State


class CollectionSelectState(State):
    """Table list has the keyboard."""

    help_category = "Tables"

    def _setup_actions(self) -> None:
        def has_collections(app: InputContext) -> bool:
            return app.has_collections

        self.allows("choose_collection", has_collections, label="Open", help="Open the highlighted table")
        self.allows("filter_collections", label="Filter", help="Filter tables")
        self.allows("refresh_collections", lambda app: not app.loading, label="Refresh", help="Reload the table list")
        self.allows("select_next", has_collections)
        self.allows("select_previous", has_collections)
        self.allows("select_first", has_collections)
        self.allows("select_last", has_collections)

    def is_active(self, app: InputContext) -> bool:
        return app.mode == Mode.SELECT_COLLECTION


class CollectionFilterState(State):
    """Typing into the table filter."""

    help_category = "Tables"

    def _setup_actions(self) -> None:
        def has_collections(app: InputContext) -> bool:
            return app.has_collections

        self.allows("submit_text", label="Apply", help="Keep the filter")
        self.allows("cancel_text", label="Clear", help="Clear the filter")
        self.allows("delete_character")
        self.allows("caret_left")
        self.allows("caret_right")
        self.allows("select_next", has_collections)
        self.allows("select_previous", has_collections)

    def is_active(self, app: InputContext) -> bool:
        return app.mode == Mode.FILTER_COLLECTIONS
