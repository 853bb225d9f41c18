"""Table list and table filter components."""

from __future__ import annotations

from dynamit.core import messages as m
from dynamit.core.component import Component, Handler
from dynamit.core.modes import Mode
from dynamit.shared.filtering import filter_names
from dynamit.shared.selection import Selection
from dynamit.shared.text_input import TextInput

LIST_MODES = (Mode.SELECT_COLLECTION, Mode.FILTER_COLLECTIONS)


class CollectionsPane(Component):
    """Every table name from the last listing and the filtered view over it."""

    def __init__(self) -> None:
        super().__init__()
        self.names: list[str] = []
        self.filter_text = ""
        self.filtered: list[str] = []
        self.selection = Selection()
        self.chosen: str | None = None
        self.listed = False

    def handlers(self) -> dict[type[m.Message], Handler]:
        return {
            m.FetchCollections: self._on_fetch,
            m.CollectionsLoaded: self._on_loaded,
            m.CollectionFilterChanged: self._on_filter_changed,
            m.ChooseCollection: self._on_choose,
            m.RequestDropped: self._on_request_dropped,
            m.SelectNext: self._on_next,
            m.SelectPrevious: self._on_previous,
            m.SelectFirst: self._on_first,
            m.SelectLast: self._on_last,
        }

    @property
    def active(self) -> bool:
        return self.mode in LIST_MODES

    @property
    def selected_name(self) -> str | None:
        return self.selection.value(self.filtered)

    def apply_filter(self) -> None:
        self.filtered = filter_names(self.names, self.filter_text)

    def _on_fetch(self, message: m.Message) -> list[m.Message]:
        return [m.StartLoading("Loading Tables...")]

    def _on_loaded(self, message: m.CollectionsLoaded) -> None:
        previous = self.selected_name
        self.names = list(message.names)
        self.listed = True
        self.apply_filter()
        if previous in self.filtered:
            self.selection.select(self.filtered.index(previous), len(self.filtered))
        else:
            self.selection.reset(len(self.filtered))

    def _on_filter_changed(self, message: m.CollectionFilterChanged) -> None:
        self.filter_text = message.text
        self.apply_filter()
        self.selection.reset(len(self.filtered))

    def _on_choose(self, message: m.Message) -> list[m.Message]:
        name = self.selected_name
        if name is None:
            return []
        if name == self.chosen:
            return [m.EnterMode(Mode.SELECT_RECORD)]
        self.chosen = name
        return [m.CollectionSelected(name)]

    def _on_request_dropped(self, message: m.RequestDropped) -> None:
        # The first page never came; choosing the table again must refetch.
        if message.kind == "ScanPage" and self.active:
            self.chosen = None

    def _on_next(self, message: m.Message) -> None:
        if self.active:
            self.selection.next(len(self.filtered))

    def _on_previous(self, message: m.Message) -> None:
        if self.active:
            self.selection.previous(len(self.filtered))

    def _on_first(self, message: m.Message) -> None:
        if self.active:
            self.selection.first(len(self.filtered))

    def _on_last(self, message: m.Message) -> None:
        if self.active:
            self.selection.last(len(self.filtered))

    def view_rows(self) -> list[str]:
        return list(self.filtered)

    def empty_text(self) -> str:
        if not self.listed:
            return ""
        if not self.names:
            return "No tables found."
        return "No tables match the filter."


class CollectionFilterInput(Component):
    """Text input that filters the table list as the user types."""

    def __init__(self) -> None:
        super().__init__()
        self.input = TextInput()

    def handlers(self) -> dict[type[m.Message], Handler]:
        return {
            m.InsertCharacter: self._on_insert,
            m.DeleteCharacter: self._on_delete,
            m.CaretLeft: self._on_left,
            m.CaretRight: self._on_right,
            m.SubmitText: self._on_submit,
            m.CancelText: self._on_cancel,
        }

    @property
    def active(self) -> bool:
        return self.mode == Mode.FILTER_COLLECTIONS

    def _changed(self) -> list[m.Message]:
        return [m.CollectionFilterChanged(self.input.text)]

    def _on_insert(self, message: m.InsertCharacter) -> list[m.Message] | None:
        if not self.active:
            return None
        self.input.insert(message.character)
        return self._changed()

    def _on_delete(self, message: m.Message) -> list[m.Message] | None:
        if not self.active or not self.input.delete_before():
            return None
        return self._changed()

    def _on_left(self, message: m.Message) -> None:
        if self.active:
            self.input.move_left()

    def _on_right(self, message: m.Message) -> None:
        if self.active:
            self.input.move_right()

    def _on_submit(self, message: m.Message) -> list[m.Message] | None:
        if not self.active:
            return None
        return [m.EnterMode(Mode.SELECT_COLLECTION)]

    def _on_cancel(self, message: m.Message) -> list[m.Message] | None:
        if not self.active:
            return None
        self.input.clear()
        return [*self._changed(), m.EnterMode(Mode.SELECT_COLLECTION)]

    @property
    def visible(self) -> bool:
        return self.active or not self.input.is_empty

    def view(self) -> tuple[str, int]:
        """Filter text and caret position for drawing."""
        return self.input.text, self.input.caret
