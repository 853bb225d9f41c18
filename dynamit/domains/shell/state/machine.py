"""Hierarchical State Machine for UI action validation and binding display.

Each explorer mode has one state; every state inherits the root's global
actions. The active state decides whether an action bound to a key may run
and which bindings the status bar shows.
"""

from __future__ import annotations

from dynamit.core.input_context import InputContext
from dynamit.core.state_base import ActionResult, DisplayBinding, HelpEntry, State
from dynamit.domains.collections.state import CollectionFilterState, CollectionSelectState
from dynamit.domains.detail.state import RecordDetailState
from dynamit.domains.records.state import RecordFilterState, RecordQueryState, RecordSelectState
from dynamit.domains.shell.state.root import RootState


class UIStateMachine:
    """Hierarchical state machine for UI action validation and binding display."""

    def __init__(self) -> None:
        self.root = RootState()

        self.collection_select = CollectionSelectState(parent=self.root)
        self.collection_filter = CollectionFilterState(parent=self.root)
        self.record_select = RecordSelectState(parent=self.root)
        self.record_filter = RecordFilterState(parent=self.root)
        self.record_query = RecordQueryState(parent=self.root)
        self.record_detail = RecordDetailState(parent=self.root)

        self._states = [
            self.collection_select,
            self.collection_filter,
            self.record_select,
            self.record_filter,
            self.record_query,
            self.record_detail,
            self.root,
        ]

    def get_active_state(self, app: InputContext) -> State:
        """Find the most specific active state."""
        for state in self._states:
            if state.is_active(app):
                return state
        return self.root

    def check_action(self, app: InputContext, action_name: str) -> bool:
        """Check if action is allowed in current state."""
        state = self.get_active_state(app)
        result = state.check_action(app, action_name)
        return result == ActionResult.ALLOWED

    def get_display_bindings(self, app: InputContext) -> tuple[list[DisplayBinding], list[DisplayBinding]]:
        """Get bindings to display in the status bar for current state."""
        state = self.get_active_state(app)
        return state.get_display_bindings(app)

    def get_help_entries(self) -> list[HelpEntry]:
        entries: list[HelpEntry] = []
        for state in self._states:
            entries.extend(state.get_help_entries())
        return entries

    def generate_help_text(self) -> str:
        """Help text with every documented binding, one section per category."""

        def section(title: str) -> str:
            return f"[bold]{title.upper()}[/]\n[dim]{'-' * 48}[/]"

        def binding(key: str, desc: str) -> str:
            return f"  [bold yellow]{key:<14}[/] [dim]-[/] {desc}"

        grouped: dict[str, list[HelpEntry]] = {}
        for entry in self.get_help_entries():
            entries = grouped.setdefault(entry.category, [])
            if all((seen.key, seen.description) != (entry.key, entry.description) for seen in entries):
                entries.append(entry)

        lines: list[str] = []
        for category, entries in grouped.items():
            if lines:
                lines.append("")
            lines.append(section(category))
            lines.extend(binding(entry.key, entry.description) for entry in entries)
        return "\n".join(lines)
