"""Record detail component: the open record rendered as an expandable tree."""

from __future__ import annotations

from dynamit.core import messages as m
from dynamit.core.component import Component, Handler
from dynamit.core.modes import Mode
from dynamit.domains.detail.tree import RecordTree, TreeRow, value_text


class DetailPane(Component):
    def __init__(self) -> None:
        super().__init__()
        self.tree = RecordTree()

    def handlers(self) -> dict[type[m.Message], Handler]:
        return {
            m.RecordOpened: self._on_opened,
            m.CollectionSelected: self._on_collection_selected,
            m.SelectNext: self._on_next,
            m.SelectPrevious: self._on_previous,
            m.SelectFirst: self._on_first,
            m.SelectLast: self._on_last,
            m.ScrollDown: self._on_scroll_down,
            m.ScrollUp: self._on_scroll_up,
            m.ToggleNode: self._on_toggle,
            m.ExpandAll: self._on_expand_all,
            m.CollapseAll: self._on_collapse_all,
            m.ScrollLeft: self._on_scroll_left,
            m.ScrollRight: self._on_scroll_right,
            m.CopyNodeValue: self._on_copy_node,
            m.CopyRecord: self._on_copy_record,
            m.CloseDetail: self._on_close,
        }

    @property
    def active(self) -> bool:
        return self.mode == Mode.VIEW_RECORD

    @property
    def rows(self) -> list[TreeRow]:
        return self.tree.rows

    def _on_opened(self, message: m.RecordOpened) -> None:
        self.tree.load(message.record)

    def _on_collection_selected(self, message: m.Message) -> None:
        self.tree.clear()

    def _on_next(self, message: m.Message) -> None:
        if self.active:
            self.tree.selection.next(len(self.rows))

    def _on_previous(self, message: m.Message) -> None:
        if self.active:
            self.tree.selection.previous(len(self.rows))

    def _on_first(self, message: m.Message) -> None:
        if self.active:
            self.tree.selection.first(len(self.rows))

    def _on_last(self, message: m.Message) -> None:
        if self.active:
            self.tree.selection.last(len(self.rows))

    def _on_scroll_down(self, message: m.Message) -> None:
        if self.active:
            self.tree.selection.scroll_down(len(self.rows))

    def _on_scroll_up(self, message: m.Message) -> None:
        if self.active:
            self.tree.selection.scroll_up(len(self.rows))

    def _on_toggle(self, message: m.Message) -> None:
        if self.active:
            self.tree.toggle_selected()

    def _on_expand_all(self, message: m.Message) -> None:
        if self.active:
            self.tree.expand_all()

    def _on_collapse_all(self, message: m.Message) -> None:
        if self.active:
            self.tree.collapse_all()

    def _on_scroll_left(self, message: m.Message) -> None:
        if self.active:
            self.tree.scroll_left()

    def _on_scroll_right(self, message: m.Message) -> None:
        if self.active:
            self.tree.scroll_right()

    def _on_copy_node(self, message: m.Message) -> list[m.Message] | None:
        row = self.tree.selected_row
        if not self.active or row is None:
            return None
        return [m.CopyToClipboard(value_text(row.value))]

    def _on_copy_record(self, message: m.Message) -> list[m.Message] | None:
        if not self.active or not self.tree.record:
            return None
        return [m.CopyToClipboard(self.tree.record)]

    def _on_close(self, message: m.Message) -> list[m.Message] | None:
        if not self.active:
            return None
        return [m.EnterMode(Mode.SELECT_RECORD)]

    def empty_text(self) -> str:
        if self.tree.record and not self.tree.valid:
            return "Record is not valid JSON."
        return ""
