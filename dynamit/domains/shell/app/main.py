"""Main Textual application for dynamit."""

from __future__ import annotations

from typing import Any, ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.timer import Timer
from textual.widgets import Static

from dynamit.core.key_router import KeyEvent
from dynamit.core.modes import Mode
from dynamit.domains.records.query_form import UNSUPPORTED_TEXT
from dynamit.domains.shell.app.dispatcher import Dispatcher
from dynamit.domains.store.client import FetchClient
from dynamit.domains.store.protocols import StoreClient
from dynamit.domains.worker.worker import FetchWorker, create_channels
from dynamit.shared.app.runtime import RuntimeConfig
from dynamit.shared.app.services import build_store
from dynamit.shared.ui.screens import HelpScreen
from dynamit.shared.ui.widgets import InputLine, ListPanel, QueryFormLine
from dynamit.shared.ui.widgets_record_tree import RecordTreePanel


class DynamitApp(App):
    """Main dynamit TUI application."""

    TITLE = "dynamit"

    CSS = """
    #content {
        height: 1fr;
    }

    #sidebar {
        width: 32;
    }

    #main-panel {
        width: 1fr;
    }

    #loading {
        height: 1;
        padding: 0 1;
        color: $warning;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
        background: $primary-background;
    }

    #help-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[Any]] = []

    def __init__(
        self,
        *,
        runtime: RuntimeConfig | None = None,
        store: StoreClient | None = None,
    ) -> None:
        super().__init__()
        self.runtime = runtime or RuntimeConfig.from_env()
        self.store = store or build_store(self.runtime)
        requests, responses = create_channels(self.runtime.queue_size)
        self.worker = FetchWorker(FetchClient(self.store, self.runtime.page_size), requests, responses)
        self.dispatcher = Dispatcher(
            requests,
            responses,
            region=self.runtime.region,
            terminal_copy=self.copy_to_clipboard,
            notifier=self._show_notice,
            help_viewer=self._show_help,
        )
        self._tick_timer: Timer | None = None
        self._frame_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="main-container"):
            with Horizontal(id="content"):
                with Vertical(id="sidebar"):
                    yield InputLine("/", id="collection-filter")
                    yield ListPanel("Tables", id="collections")
                with Vertical(id="main-panel"):
                    yield InputLine("/", id="record-filter")
                    yield QueryFormLine(id="query-form")
                    yield ListPanel("Items", id="records")
                    yield RecordTreePanel(id="detail")
            yield Static("", id="loading", markup=False)
            yield Static("", id="status-bar", markup=False)
        yield Static("", id="help-bar", markup=False)

    def on_mount(self) -> None:
        self.run_worker(self.worker.run, name="fetch-worker", thread=True, exclusive=True)
        self.dispatcher.start()
        self._tick_timer = self.set_interval(1 / self.runtime.tick_rate, self._on_tick)
        self._frame_timer = self.set_interval(1 / self.runtime.frame_rate, self._on_frame)
        self.refresh_view()

    def on_unmount(self) -> None:
        for timer in (self._tick_timer, self._frame_timer):
            if timer is not None:
                timer.stop()
        self._tick_timer = None
        self._frame_timer = None
        self.worker.close()

    def on_key(self, event: Key) -> None:
        """Route key presses through the dispatcher."""
        if isinstance(self.screen, HelpScreen):
            return
        handled = self.dispatcher.step(KeyEvent.from_textual(event.key, event.character))
        if handled:
            event.prevent_default()
            event.stop()
        self._after_step()

    def _on_tick(self) -> None:
        self.dispatcher.tick()
        self._after_step()

    def _on_frame(self) -> None:
        self.dispatcher.step()
        self._after_step()

    def _after_step(self) -> None:
        if self.dispatcher.should_quit:
            self.worker.close()
            self.exit()
            return
        self.refresh_view()

    def _show_help(self, text: str) -> None:
        self.push_screen(HelpScreen(text))

    def _show_notice(self, text: str, severity: str) -> None:
        if severity == "information":
            return
        self.notify(text, severity=severity)  # type: ignore[arg-type]

    # -- rendering ------------------------------------------------------------

    def refresh_view(self) -> None:
        dispatcher = self.dispatcher
        mode = dispatcher.mode
        collections = dispatcher.collections
        collection_filter = dispatcher.collection_filter
        records = dispatcher.records
        detail = dispatcher.detail

        collections_panel = self.query_one("#collections", ListPanel)
        collections_panel.set_rows(
            collections.view_rows(),
            collections.selection.selected,
            anchor=collections.selection.scroll_position,
            filter_text=collections.filter_text,
            empty_text=collections.empty_text(),
        )
        collections_panel.set_class(collections.active, "active")

        filter_line = self.query_one("#collection-filter", InputLine)
        if collection_filter.visible:
            text, caret = collection_filter.view()
            filter_line.show(text, caret, focused=collection_filter.active)
        else:
            filter_line.hide()

        record_filter = self.query_one("#record-filter", InputLine)
        text, caret = records.filter_view()
        if mode == Mode.FILTER_RECORDS or text:
            record_filter.show(text, caret, focused=mode == Mode.FILTER_RECORDS)
        else:
            record_filter.hide()

        query_form = self.query_one("#query-form", QueryFormLine)
        if mode == Mode.QUERY_RECORDS:
            unsupported = None if records.query.supported else UNSUPPORTED_TEXT
            query_form.show(records.query.view_fields(), unsupported)
        else:
            query_form.hide()

        records_panel = self.query_one("#records", ListPanel)
        tree_panel = self.query_one("#detail", RecordTreePanel)
        if mode == Mode.VIEW_RECORD:
            records_panel.display = False
            tree_panel.show(
                detail.rows,
                detail.tree.selection.selected,
                offset=detail.tree.horizontal_offset,
                empty_text=detail.empty_text(),
            )
        else:
            tree_panel.hide()
            records_panel.display = True
            records_panel.set_rows(
                records.view_rows(),
                records.selection.selected,
                anchor=records.selection.scroll_position,
                filter_text=records.filter.text,
                title=records.title(),
                subtitle=records.status_text() if records.collection else "",
            )
            records_panel.set_class(records.active, "active")

        self.query_one("#loading", Static).update(dispatcher.loading.view())
        self.query_one("#status-bar", Static).update(dispatcher.status.view())
        self.query_one("#help-bar", Static).update(self._help_line())

    def _help_line(self) -> Text:
        left, right = self.dispatcher.machine.get_display_bindings(self.dispatcher.input_context())
        line = Text()
        for binding in [*left, *right]:
            if line:
                line.append("  ")
            line.append(binding.key, style="bold")
            line.append(f" {binding.label}")
        return line
