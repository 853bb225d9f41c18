"""Test helpers for driving the explorer without a terminal or a worker thread."""

from __future__ import annotations

import json
import queue

from dynamit.core.key_router import KeyEvent
from dynamit.domains.shell.app.dispatcher import Dispatcher
from dynamit.domains.store.client import FetchClient
from dynamit.domains.store.memory import InMemoryStore, InMemoryTable
from dynamit.domains.worker.worker import FetchWorker, create_channels


def make_items(count: int, *, start: int = 0, prefix: str = "item") -> list[dict]:
    return [{"id": f"{prefix}-{i:04d}", "n": i} for i in range(start, start + count)]


def make_records(count: int, *, start: int = 0) -> list[str]:
    return [json.dumps(item) for item in make_items(count, start=start)]


def make_store(**tables: int) -> InMemoryStore:
    """Store with one ``id``-keyed table per keyword, sized by its value."""
    return InMemoryStore([InMemoryTable(name, make_items(size, prefix=name)) for name, size in tables.items()])


class Harness:
    """Dispatcher plus a FetchWorker served synchronously on demand."""

    def __init__(self, store: InMemoryStore, *, page_size: int = 100, queue_size: int = 32) -> None:
        self.store = store
        requests, responses = create_channels(queue_size)
        self.worker = FetchWorker(FetchClient(store, page_size), requests, responses)
        self.copied: list[str] = []
        self.notices: list[tuple[str, str]] = []
        self.helps: list[str] = []
        self.dispatcher = Dispatcher(
            requests,
            responses,
            region=store.region,
            terminal_copy=self.copied.append,
            notifier=lambda text, severity: self.notices.append((text, severity)),
            help_viewer=self.helps.append,
        )

    def serve_one(self) -> bool:
        """Answer the oldest queued request without polling."""
        try:
            request = self.worker.requests.get_nowait()
        except queue.Empty:
            return False
        self.worker.responses.put_nowait(self.worker.serve(request))
        return True

    def pump(self) -> None:
        """Serve and poll until no request is left."""
        while self.serve_one():
            self.dispatcher.poll()

    def start(self) -> Harness:
        self.dispatcher.start()
        self.pump()
        return self

    def press(self, key: str, character: str | None = None, *, pump: bool = True) -> bool:
        if character is None and len(key) == 1:
            character = key
        handled = self.dispatcher.step(KeyEvent.from_textual(key, character))
        if pump:
            self.pump()
        return handled

    def type(self, text: str) -> None:
        for character in text:
            key = "space" if character == " " else character
            self.press(key, character)

    def open_collection(self, name: str) -> None:
        names = self.dispatcher.collections.filtered
        self.dispatcher.collections.selection.selected = names.index(name)
        self.press("enter")
