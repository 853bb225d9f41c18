"""Background thread that serves fetch requests one at a time."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from typing import Any

from dynamit.domains.store.client import FetchClient
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
from dynamit.shared.core.debug_events import emit_debug_event

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 32

_SHUTDOWN = object()

RESPONSE_PUT_TIMEOUT = 0.1


def create_channels(size: int = DEFAULT_QUEUE_SIZE) -> tuple[queue.Queue, queue.Queue]:
    """Create the bounded (requests, responses) queue pair."""
    return queue.Queue(maxsize=size), queue.Queue(maxsize=size)


class FetchWorker:
    """Single consumer of the request queue and single producer of responses.

    Requests are served strictly in arrival order. The worker only talks to
    the store through its FetchClient and never touches UI state.
    """

    def __init__(
        self,
        client: FetchClient,
        requests: queue.Queue,
        responses: queue.Queue,
    ) -> None:
        self.client = client
        self.requests = requests
        self.responses = responses
        self._thread: threading.Thread | None = None
        self._stopping = threading.Event()
        self._finished = threading.Event()
        self._finished.set()
        self._handlers: dict[type[FetchRequest], Callable[[Any], FetchResponse]] = {
            ListCollections: self._list_collections,
            ScanPage: self._scan_page,
            CountItems: self._count_items,
            DescribeKeys: self._describe_keys,
            QueryItems: self._query_items,
        }

    @property
    def is_running(self) -> bool:
        return not self._finished.is_set()

    def start(self) -> None:
        """Serve on a thread of our own (the app hosts ``run`` in a Textual worker instead)."""
        if self.is_running:
            return
        self._finished.clear()
        self._thread = threading.Thread(target=self.run, name="dynamit-fetch-worker", daemon=True)
        self._thread.start()

    def close(self, timeout: float | None = 2.0) -> None:
        """Close the request channel and wait for the loop to finish.

        Never blocks on a full queue: requests still pending are discarded to
        make room for the shutdown sentinel.
        """
        self._stopping.set()
        discarded = len(drain(self.requests))
        if discarded:
            emit_debug_event("worker.discarded", category="worker", count=discarded)
        try:
            self.requests.put_nowait(_SHUTDOWN)
        except queue.Full:
            # Refilled by a late producer; the loop sees the stop flag after its next request.
            logger.debug("Request queue refilled during shutdown")
        self._finished.wait(timeout)
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run(self) -> None:
        """Serve requests until the shutdown sentinel (or the stop flag) is seen."""
        self._finished.clear()
        try:
            while not self._stopping.is_set():
                request = self.requests.get()
                if request is _SHUTDOWN or self._stopping.is_set():
                    break
                self._respond(self.serve(request))
        finally:
            emit_debug_event("worker.stopped", category="worker")
            self._finished.set()

    def _respond(self, response: FetchResponse) -> None:
        while not self._stopping.is_set():
            try:
                self.responses.put(response, timeout=RESPONSE_PUT_TIMEOUT)
                return
            except queue.Full:
                continue

    def serve(self, request: FetchRequest) -> FetchResponse:
        """Handle one request; an unexpected error becomes a RequestFailed response."""
        try:
            return self.handle(request)
        except Exception as exc:
            logger.exception("Fetch worker failed on %s", request.kind)
            emit_debug_event("worker.failed", category="worker", kind=request.kind, error=str(exc))
            return RequestFailed(request.session, request.kind, str(exc))

    def handle(self, request: FetchRequest) -> FetchResponse:
        handler = self._handlers[type(request)]
        emit_debug_event("worker.request", category="worker", kind=request.kind, session=request.session)
        return handler(request)

    def _list_collections(self, request: FetchRequest) -> FetchResponse:
        return CollectionsFetched(request.session, tuple(self.client.list_collections()))

    def _scan_page(self, request: ScanPage) -> FetchResponse:
        page = self.client.scan_page(request.collection, request.cursor)
        return PageFetched(request.session, request.collection, page, continuation=request.continuation)

    def _count_items(self, request: CountItems) -> FetchResponse:
        return CountFetched(request.session, request.collection, self.client.approximate_count(request.collection))

    def _describe_keys(self, request: DescribeKeys) -> FetchResponse:
        return KeysFetched(request.session, request.collection, self.client.key_schema(request.collection))

    def _query_items(self, request: QueryItems) -> FetchResponse:
        records = self.client.query_by_key(
            request.collection,
            request.partition_key,
            request.partition_value,
            request.sort_key,
            request.sort_value,
        )
        return QueryFetched(request.session, request.collection, tuple(records))


def submit(requests: queue.Queue, request: FetchRequest) -> bool:
    """Enqueue without blocking; a full queue drops the request."""
    try:
        requests.put_nowait(request)
    except queue.Full:
        logger.warning("Fetch request queue full, dropping %s", request.kind)
        emit_debug_event("worker.dropped", category="worker", kind=request.kind, session=request.session)
        return False
    return True


def drain(responses: queue.Queue) -> list[FetchResponse]:
    """Take every pending response without blocking."""
    drained: list[FetchResponse] = []
    while True:
        try:
            drained.append(responses.get_nowait())
        except queue.Empty:
            return drained
