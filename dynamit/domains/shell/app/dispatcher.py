"""Interactive loop core: routes messages between input, components and the worker.

One ``step`` of the loop drains every pending worker response, translates at
most one key event, then applies all pending messages until none remain.
Each message is applied to the dispatcher first and then to every component
in a fixed order; follow-up messages returned by either are queued behind it.
Nothing here blocks: store access only happens on the worker thread.
"""

from __future__ import annotations

import logging
import queue
from collections import deque
from collections.abc import Callable, Iterable

from dynamit.core import messages as m
from dynamit.core.component import Component
from dynamit.core.input_context import InputContext
from dynamit.core.key_router import KeyEvent, translate_key
from dynamit.core.keymap import KeymapProvider
from dynamit.core.modes import Mode
from dynamit.domains.collections.component import CollectionFilterInput, CollectionsPane
from dynamit.domains.detail.component import DetailPane
from dynamit.domains.records.component import RecordsPane
from dynamit.domains.shell.components import LoadingIndicator, StatusBar
from dynamit.domains.shell.state import UIStateMachine
from dynamit.domains.worker.requests import (
    CollectionsFetched,
    CountFetched,
    CountItems,
    DescribeKeys,
    FetchRequest,
    FetchResponse,
    KeysFetched,
    ListCollections,
    PageFetched,
    QueryFetched,
    QueryItems,
    RequestFailed,
    ScanPage,
)
from dynamit.domains.worker.worker import drain, submit
from dynamit.shared.clipboard import copy_text
from dynamit.shared.core.debug_events import emit_debug_event

logger = logging.getLogger(__name__)

# Drops of these requests are surfaced to the user; the others only feed
# display-only state and are just logged.
VISIBLE_DROPS = (ListCollections, ScanPage, QueryItems)
VISIBLE_KINDS = tuple(kind.__name__ for kind in VISIBLE_DROPS)

Notifier = Callable[[str, str], None]


class Dispatcher:
    """Owns the mode, the session generation, both queues and the components."""

    def __init__(
        self,
        requests: queue.Queue,
        responses: queue.Queue,
        *,
        region: str = "",
        keymap: KeymapProvider | None = None,
        terminal_copy: Callable[[str], None] | None = None,
        notifier: Notifier | None = None,
        help_viewer: Callable[[str], None] | None = None,
    ) -> None:
        self.requests = requests
        self.responses = responses
        self.keymap = keymap
        self.terminal_copy = terminal_copy
        self.notifier = notifier
        self.help_viewer = help_viewer
        self.mode = Mode.SELECT_COLLECTION
        self.session = 0
        # Table listings belong to no collection session and carry their own generation.
        self.listing = 0
        self.should_quit = False
        self.machine = UIStateMachine()
        self.pending: deque[m.Message] = deque()

        self.collections = CollectionsPane()
        self.collection_filter = CollectionFilterInput()
        self.records = RecordsPane()
        self.loading = LoadingIndicator()
        self.detail = DetailPane()
        self.status = StatusBar(region)
        self.components: list[Component] = [
            self.collections,
            self.collection_filter,
            self.records,
            self.loading,
            self.detail,
            self.status,
        ]

    # -- loop ---------------------------------------------------------------

    def start(self) -> None:
        """List the collections; the explorer opens in collection selection."""
        self.process([m.FetchCollections()])

    def step(self, event: KeyEvent | None = None) -> bool:
        """One loop iteration; True when the key produced a message."""
        self.poll()
        if event is None:
            return False
        return self.handle_key(event)

    def tick(self) -> None:
        self.poll()
        self.process([m.Tick()])

    def poll(self) -> None:
        """Drain the response queue and apply what it produced."""
        messages: list[m.Message] = []
        for response in drain(self.responses):
            messages.extend(self.translate_response(response))
        self.process(messages)

    def handle_key(self, event: KeyEvent) -> bool:
        message = translate_key(event, self.input_context(), self.machine, self.keymap)
        if message is None:
            return False
        self.process([message])
        return True

    def process(self, messages: Iterable[m.Message]) -> None:
        self.pending.extend(messages)
        while self.pending:
            message = self.pending.popleft()
            if not isinstance(message, m.Tick):
                emit_debug_event("dispatch.message", category="dispatcher", message=type(message).__name__)
            self.pending.extend(self.apply(message))

    def apply(self, message: m.Message) -> list[m.Message]:
        follow = self._handle(message)
        for component in self.components:
            follow.extend(component.update(message))
        return follow

    # -- input context --------------------------------------------------------

    def input_context(self) -> InputContext:
        records = self.records
        schema = records.query.schema
        return InputContext(
            mode=self.mode,
            loading=self.loading.loading,
            has_collections=bool(self.collections.filtered),
            has_selected_collection=records.collection is not None,
            has_records=bool(records.filtered),
            has_record_selected=records.selected_record is not None,
            has_partition_key=schema.partition_key is not None,
            has_sort_key=schema.sort_key is not None,
            record_filter_active=records.filter_active,
            fetch_in_flight=records.pagination.fetch_in_flight,
            detail_has_rows=bool(self.detail.rows),
        )

    # -- worker responses -----------------------------------------------------

    def translate_response(self, response: FetchResponse) -> list[m.Message]:
        current = self.listing if self._is_listing(response) else self.session
        if response.session != current:
            emit_debug_event(
                "dispatch.stale_response",
                category="dispatcher",
                kind=type(response).__name__,
                session=response.session,
                current=current,
            )
            return []
        if isinstance(response, CollectionsFetched):
            return [m.CollectionsLoaded(response.names), m.StopLoading()]
        if isinstance(response, PageFetched):
            page = response.page
            if response.continuation:
                return [m.MoreRecordsLoaded(page.items, page.next_cursor)]
            return [m.RecordsLoaded(page.items, page.next_cursor)]
        if isinstance(response, CountFetched):
            return [m.ApproximateCountLoaded(response.count)]
        if isinstance(response, KeysFetched):
            return [m.KeySchemaLoaded(response.schema)]
        if isinstance(response, QueryFetched):
            return [m.QueryResultsLoaded(response.records)]
        if isinstance(response, RequestFailed):
            if response.kind not in VISIBLE_KINDS:
                return []
            return [m.RequestDropped(response.kind), m.Notify(f"Request failed: {response.error}", severity="error")]
        logger.warning("Unknown fetch response %r", response)
        return []

    @staticmethod
    def _is_listing(response: FetchResponse) -> bool:
        if isinstance(response, CollectionsFetched):
            return True
        return isinstance(response, RequestFailed) and response.kind == ListCollections.__name__

    # -- dispatcher-owned messages --------------------------------------------

    def _submit(self, request: FetchRequest) -> list[m.Message]:
        if submit(self.requests, request):
            return []
        if not isinstance(request, VISIBLE_DROPS):
            return []
        return [
            m.RequestDropped(request.kind),
            m.Notify("Too many pending requests, try again.", severity="warning"),
        ]

    def _new_session(self) -> int:
        self.session += 1
        emit_debug_event("dispatch.session", category="dispatcher", session=self.session)
        return self.session

    def _handle(self, message: m.Message) -> list[m.Message]:
        if isinstance(message, m.Quit):
            self.should_quit = True
            return []
        if isinstance(message, m.EnterMode):
            emit_debug_event("dispatch.mode", category="dispatcher", previous=self.mode.value, mode=message.mode.value)
            self.mode = message.mode
            return []
        if isinstance(message, m.FetchCollections):
            self.listing += 1
            return self._submit(ListCollections(self.listing))
        if isinstance(message, m.FetchRecords):
            session = self._new_session()
            follow = self._submit(ScanPage(session, message.collection))
            follow.extend(self._submit(CountItems(session, message.collection)))
            return follow
        if isinstance(message, m.FetchMoreRecords):
            return self._submit(ScanPage(self.session, message.collection, message.cursor))
        if isinstance(message, m.FetchKeySchema):
            return self._submit(DescribeKeys(self.session, message.collection))
        if isinstance(message, m.QueryByKey):
            session = self._new_session()
            return self._submit(
                QueryItems(
                    session,
                    message.collection,
                    message.partition_key,
                    message.partition_value,
                    message.sort_key,
                    message.sort_value,
                )
            )
        if isinstance(message, m.CopyToClipboard):
            if copy_text(message.text, self.terminal_copy):
                return [m.Notify("Copied to clipboard")]
            return [m.Notify("Clipboard unavailable", severity="warning")]
        if isinstance(message, m.ShowHelp):
            if self.help_viewer is not None:
                self.help_viewer(self.machine.generate_help_text())
            return []
        if isinstance(message, m.Notify):
            if self.notifier is not None:
                self.notifier(message.text, message.severity)
            return []
        return []
