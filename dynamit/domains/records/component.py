"""Item list component: paged buffer, live filter and key query form."""

from __future__ import annotations

from dynamit.core import messages as m
from dynamit.core.component import Component, Handler
from dynamit.core.modes import Mode
from dynamit.domains.records.pagination import PaginationController
from dynamit.domains.records.query_form import QueryForm
from dynamit.domains.store.types import KeySchema
from dynamit.domains.worker.requests import QueryItems, ScanPage
from dynamit.shared.filtering import filter_records
from dynamit.shared.selection import Selection
from dynamit.shared.text_input import TextInput

RECORD_MODES = (Mode.SELECT_RECORD, Mode.FILTER_RECORDS, Mode.QUERY_RECORDS)


class RecordsPane(Component):
    """Records of the chosen collection.

    The raw buffer lives in the pagination controller; ``filtered`` is
    re-derived from it after every filter edit and every buffer change, and
    the selection indexes into ``filtered``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.pagination = PaginationController()
        self.filter = TextInput()
        self.filtered: list[str] = []
        self.selection = Selection()
        self.query = QueryForm()
        self.approximate_count = 0
        self.showing_query_results = False

    def handlers(self) -> dict[type[m.Message], Handler]:
        return {
            m.CollectionSelected: self._on_collection_selected,
            m.RecordsLoaded: self._on_records_loaded,
            m.MoreRecordsLoaded: self._on_more_records_loaded,
            m.QueryResultsLoaded: self._on_query_results_loaded,
            m.ApproximateCountLoaded: self._on_count_loaded,
            m.KeySchemaLoaded: self._on_key_schema_loaded,
            m.RequestDropped: self._on_request_dropped,
            m.SelectNext: self._on_next,
            m.SelectPrevious: self._on_previous,
            m.SelectFirst: self._on_first,
            m.SelectLast: self._on_last,
            m.ScrollDown: self._on_scroll_down,
            m.ScrollUp: self._on_scroll_up,
            m.InsertCharacter: self._on_insert,
            m.DeleteCharacter: self._on_delete,
            m.CaretLeft: self._on_left,
            m.CaretRight: self._on_right,
            m.SubmitText: self._on_submit,
            m.CancelText: self._on_cancel,
            m.ToggleQueryFocus: self._on_toggle_query_focus,
            m.ClearRecordFilter: self._on_clear_filter,
            m.OpenRecord: self._on_open,
            m.CopyRecord: self._on_copy,
        }

    @property
    def collection(self) -> str | None:
        return self.pagination.collection

    @property
    def records(self) -> list[str]:
        return self.pagination.records

    @property
    def selected_record(self) -> str | None:
        return self.selection.value(self.filtered)

    @property
    def filter_active(self) -> bool:
        return not self.filter.is_empty or self.showing_query_results

    def apply_filter(self) -> None:
        self.filtered = filter_records(self.pagination.records, self.filter.text)

    def _fresh_fetch(self, collection: str) -> list[m.Message]:
        self.pagination.reset(collection)
        self.filtered = []
        self.selection.select_none()
        self.showing_query_results = False
        return [m.StartLoading("Fetching Data..."), m.FetchRecords(collection)]

    def _maybe_load_more(self, *, force: bool = False) -> list[m.Message]:
        collection = self.pagination.collection
        if collection is None:
            return []
        cursor = self.pagination.request_more(self.selection.selected, force=force)
        if cursor is None:
            return []
        return [m.StartLoading("Loading More Data..."), m.FetchMoreRecords(collection, cursor)]

    # -- store results ------------------------------------------------------

    def _on_collection_selected(self, message: m.CollectionSelected) -> list[m.Message]:
        self.filter.clear()
        self.query.set_schema(KeySchema())
        self.approximate_count = 0
        return [*self._fresh_fetch(message.name), m.FetchKeySchema(message.name)]

    def _on_records_loaded(self, message: m.RecordsLoaded) -> list[m.Message]:
        self.pagination.first_page(message.records, message.next_cursor)
        self.apply_filter()
        self.selection.reset(len(self.filtered))
        follow: list[m.Message] = [m.StopLoading()]
        if self.mode in (Mode.SELECT_COLLECTION, Mode.FILTER_COLLECTIONS):
            follow.append(m.EnterMode(Mode.SELECT_RECORD))
        return follow

    def _on_more_records_loaded(self, message: m.MoreRecordsLoaded) -> list[m.Message]:
        self.pagination.continuation(message.records, message.next_cursor)
        self.apply_filter()
        if self.selection.selected is None:
            self.selection.reset(len(self.filtered))
        else:
            self.selection.clamp(len(self.filtered))
        return [m.StopLoading()]

    def _on_query_results_loaded(self, message: m.QueryResultsLoaded) -> list[m.Message]:
        self.pagination.replace(message.records)
        self.showing_query_results = True
        self.apply_filter()
        self.selection.reset(len(self.filtered))
        return [m.StopLoading()]

    def _on_count_loaded(self, message: m.ApproximateCountLoaded) -> None:
        self.approximate_count = message.count

    def _on_key_schema_loaded(self, message: m.KeySchemaLoaded) -> None:
        self.query.set_schema(message.schema)

    def _on_request_dropped(self, message: m.RequestDropped) -> None:
        if message.kind == ScanPage.__name__:
            self.pagination.dropped()
        elif message.kind == QueryItems.__name__:
            self.showing_query_results = False

    # -- selection ----------------------------------------------------------

    def _on_next(self, message: m.Message) -> list[m.Message] | None:
        if self.mode != Mode.SELECT_RECORD:
            return None
        self.selection.next(len(self.filtered))
        return self._maybe_load_more()

    def _on_previous(self, message: m.Message) -> None:
        if self.mode == Mode.SELECT_RECORD:
            self.selection.previous(len(self.filtered))

    def _on_first(self, message: m.Message) -> None:
        if self.mode == Mode.SELECT_RECORD:
            self.selection.first(len(self.filtered))

    def _on_last(self, message: m.Message) -> list[m.Message] | None:
        if self.mode != Mode.SELECT_RECORD:
            return None
        self.selection.last(len(self.filtered))
        return self._maybe_load_more(force=True)

    def _on_scroll_down(self, message: m.Message) -> list[m.Message] | None:
        if self.mode != Mode.SELECT_RECORD:
            return None
        self.selection.scroll_down(len(self.filtered))
        return self._maybe_load_more()

    def _on_scroll_up(self, message: m.Message) -> None:
        if self.mode == Mode.SELECT_RECORD:
            self.selection.scroll_up(len(self.filtered))

    # -- text entry ---------------------------------------------------------

    def _refilter(self) -> None:
        self.apply_filter()
        self.selection.reset(len(self.filtered))

    def _on_insert(self, message: m.InsertCharacter) -> None:
        if self.mode == Mode.FILTER_RECORDS:
            self.filter.insert(message.character)
            self._refilter()
        elif self.mode == Mode.QUERY_RECORDS:
            self.query.insert(message.character)

    def _on_delete(self, message: m.Message) -> None:
        if self.mode == Mode.FILTER_RECORDS:
            if self.filter.delete_before():
                self._refilter()
        elif self.mode == Mode.QUERY_RECORDS:
            self.query.delete()

    def _on_left(self, message: m.Message) -> None:
        if self.mode == Mode.FILTER_RECORDS:
            self.filter.move_left()
        elif self.mode == Mode.QUERY_RECORDS:
            self.query.move_left()

    def _on_right(self, message: m.Message) -> None:
        if self.mode == Mode.FILTER_RECORDS:
            self.filter.move_right()
        elif self.mode == Mode.QUERY_RECORDS:
            self.query.move_right()

    def _on_submit(self, message: m.Message) -> list[m.Message] | None:
        if self.mode == Mode.FILTER_RECORDS:
            return [m.EnterMode(Mode.SELECT_RECORD)]
        if self.mode != Mode.QUERY_RECORDS:
            return None
        follow: list[m.Message] = []
        if self.collection is not None:
            query = self.query.build_query(self.collection)
            if query is not None:
                self.pagination.fetch_in_flight = False
                follow.extend([m.StartLoading("Querying Data..."), query])
        follow.append(m.EnterMode(Mode.SELECT_RECORD))
        return follow

    def _on_cancel(self, message: m.Message) -> list[m.Message] | None:
        if self.mode == Mode.FILTER_RECORDS:
            self.filter.clear()
            self._refilter()
            return [m.EnterMode(Mode.SELECT_RECORD)]
        if self.mode == Mode.QUERY_RECORDS:
            self.query.clear()
            return [m.EnterMode(Mode.SELECT_RECORD)]
        return None

    def _on_toggle_query_focus(self, message: m.Message) -> None:
        if self.mode == Mode.QUERY_RECORDS:
            self.query.toggle_focus()

    def _on_clear_filter(self, message: m.Message) -> list[m.Message] | None:
        self.filter.clear()
        self.query.clear()
        if self.showing_query_results and self.collection is not None:
            # Query results replaced the scan; scan again from the start.
            return self._fresh_fetch(self.collection)
        self._refilter()
        return None

    # -- detail / clipboard -------------------------------------------------

    def _on_open(self, message: m.Message) -> list[m.Message] | None:
        record = self.selected_record
        if self.mode != Mode.SELECT_RECORD or record is None:
            return None
        return [m.RecordOpened(record), m.EnterMode(Mode.VIEW_RECORD)]

    def _on_copy(self, message: m.Message) -> list[m.Message] | None:
        record = self.selected_record
        if self.mode != Mode.SELECT_RECORD or record is None:
            return None
        return [m.CopyToClipboard(record)]

    # -- view ---------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self.mode in RECORD_MODES

    def title(self) -> str:
        return self.collection or "Items"

    def view_rows(self) -> list[str]:
        return list(self.filtered)

    def status_text(self) -> str:
        verb = "Viewing" if self.filter_active else "Fetched"
        return f"{verb} {len(self.filtered)} Items (Scanned: {self.approximate_count})"

    def filter_view(self) -> tuple[str, int]:
        return self.filter.text, self.filter.caret
