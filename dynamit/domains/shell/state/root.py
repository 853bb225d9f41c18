"""Root state shared by every mode."""

from __future__ import annotations

from dynamit.core.input_context import InputContext
from dynamit.core.state_base import State


class RootState(State):
    """Actions available everywhere."""

    help_category = "Global"

    def _setup_actions(self) -> None:
        self.allows("show_help", lambda app: not app.mode.is_text_entry, label="Help", right=True, help="Show this help")
        self.allows("quit", label="Quit", right=True, help="Quit dynamit")

    def is_active(self, app: InputContext) -> bool:
        return True
