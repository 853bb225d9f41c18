"""Item detail (tree view) state."""

from __future__ import annotations

from dynamit.core.input_context import InputContext
from dynamit.core.modes import Mode
from dynamit.core.state_base import State


class RecordDetailState(State):
    """Item detail tree has the keyboard."""

    help_category = "Item"

    def _setup_actions(self) -> None:
        def has_rows(app: InputContext) -> bool:
            return app.detail_has_rows

        self.allows("toggle_node", has_rows, label="Toggle", help="Expand/collapse node")
        self.allows("expand_all", has_rows, label="Expand all", help="Expand all nodes")
        self.allows("collapse_all", has_rows, label="Collapse all", help="Collapse all nodes")
        self.allows("copy_node_value", has_rows, label="Copy", help="Copy node value")
        self.allows("copy_record", help="Copy the whole item")
        self.allows("close_detail", label="Back", help="Back to the item list")
        self.allows("select_next", has_rows)
        self.allows("select_previous", has_rows)
        self.allows("select_first", has_rows)
        self.allows("select_last", has_rows)
        self.allows("scroll_down", has_rows)
        self.allows("scroll_up", has_rows)
        self.allows("scroll_left", has_rows)
        self.allows("scroll_right", has_rows)

    def is_active(self, app: InputContext) -> bool:
        return app.mode == Mode.VIEW_RECORD
