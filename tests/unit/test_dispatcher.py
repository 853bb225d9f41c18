"""End-to-end tests for the dispatcher, components and worker requests."""

from __future__ import annotations

import json

from dynamit.core import messages as m
from dynamit.core.modes import Mode
from dynamit.domains.store.memory import InMemoryStore, InMemoryTable
from dynamit.domains.worker.requests import ListCollections, RequestFailed, ScanPage
from dynamit.shared.core.debug_events import get_debug_events

from ..helpers import Harness, make_store


def orders_store() -> InMemoryStore:
    items = [
        {"customer": f"c{c}", "order_id": str(o), "total": c * 10 + o}
        for c in range(1, 4)
        for o in range(1, 4)
    ]
    return InMemoryStore(
        [
            InMemoryTable("orders", items, partition_key="customer", sort_key="order_id"),
            InMemoryTable("events", [{"kind": "ping"}], partition_key=None),
        ]
    )


class TestStartup:
    def test_lists_collections(self):
        h = Harness(make_store(users=3, orders=2)).start()
        collections = h.dispatcher.collections
        assert collections.names == ["orders", "users"]
        assert collections.selection.selected == 0
        assert h.dispatcher.mode == Mode.SELECT_COLLECTION
        assert h.dispatcher.loading.loading is False

    def test_quit(self):
        h = Harness(make_store(users=1)).start()
        h.press("q")
        assert h.dispatcher.should_quit is True

    def test_ctrl_c_quits_from_text_entry(self):
        h = Harness(make_store(users=1)).start()
        h.press("slash", "/")
        assert h.dispatcher.mode == Mode.FILTER_COLLECTIONS
        h.press("ctrl+c")
        assert h.dispatcher.should_quit is True

    def test_help_lists_bindings(self):
        h = Harness(make_store(users=1)).start()
        h.press("question_mark", "?")
        assert len(h.helps) == 1
        assert "Show this help" in h.helps[0]
        assert "Reload the table list" in h.helps[0]
        assert h.dispatcher.mode == Mode.SELECT_COLLECTION

    def test_collection_filter(self):
        h = Harness(make_store(users=1, orders=1, products=1)).start()
        h.press("slash", "/")
        h.type("use")
        assert h.dispatcher.collections.filtered == ["users"]
        h.press("enter")
        assert h.dispatcher.mode == Mode.SELECT_COLLECTION
        assert h.dispatcher.collections.filtered == ["users"]
        h.press("slash", "/")
        h.press("escape")
        assert h.dispatcher.collections.filtered == ["orders", "products", "users"]


class TestOpenCollection:
    def test_first_page_count_and_schema(self):
        h = Harness(make_store(users=250)).start()
        h.open_collection("users")
        records = h.dispatcher.records
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert len(records.records) == 100
        assert records.selection.selected == 0
        assert records.approximate_count == 250
        assert records.query.schema.partition_key == "id"
        assert records.status_text() == "Fetched 100 Items (Scanned: 250)"

    def test_reopening_same_collection_does_not_refetch(self):
        store = make_store(users=10)
        h = Harness(store).start()
        h.open_collection("users")
        h.press("escape")
        assert h.dispatcher.mode == Mode.SELECT_COLLECTION
        h.press("enter")
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert len(store.calls_for("scan")) == 1

    def test_store_failure_shows_empty_list(self):
        store = make_store(users=10)
        store.failing.add("scan")
        h = Harness(store).start()
        h.open_collection("users")
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert h.dispatcher.records.records == []
        assert h.dispatcher.loading.loading is False

    def test_stale_responses_are_discarded(self):
        h = Harness(make_store(orders=5, users=5)).start()
        h.dispatcher.collections.selection.selected = 1
        h.press("enter", pump=False)
        h.press("k", pump=False)
        h.press("enter", pump=False)
        h.pump()
        records = h.dispatcher.records
        assert records.collection == "orders"
        assert all(json.loads(record)["id"].startswith("orders-") for record in records.records)
        stale = [event for event in get_debug_events("dispatcher") if event.name == "dispatch.stale_response"]
        assert len(stale) == 3

    def test_refresh_then_open_keeps_new_listing(self):
        store = make_store(orders=5, users=5)
        h = Harness(store).start()
        store.add_table(InMemoryTable("products", [{"id": "p-1"}]))
        h.press("r", pump=False)
        h.press("enter", pump=False)
        h.pump()
        collections = h.dispatcher.collections
        assert collections.names == ["orders", "products", "users"]
        assert collections.selected_name == "orders"
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert h.dispatcher.records.collection == "orders"
        assert len(h.dispatcher.records.records) == 5


class TestLazyLoad:
    def test_scroll_near_end_loads_one_continuation(self):
        store = make_store(users=150)
        h = Harness(store, page_size=100).start()
        h.open_collection("users")
        records = h.dispatcher.records
        records.selection.selected = 95

        h.press("j", pump=False)
        assert records.selection.selected == 96
        assert h.worker.requests.qsize() == 1
        request = h.worker.requests.queue[0]
        assert isinstance(request, ScanPage)
        assert request.cursor == {"id": "users-0099"}
        assert h.dispatcher.loading.text == "Loading More Data..."

        h.press("j", pump=False)
        assert h.worker.requests.qsize() == 1

        h.pump()
        assert len(records.records) == 150
        assert records.pagination.has_more is False
        assert records.pagination.fetch_in_flight is False
        assert records.selection.selected == 97
        assert len(store.calls_for("scan")) == 2

    def test_jump_to_last_always_loads(self):
        store = make_store(users=250)
        h = Harness(store, page_size=100).start()
        h.open_collection("users")
        h.press("G")
        h.press("G")
        assert len(h.dispatcher.records.records) == 250
        h.press("G")
        assert len(store.calls_for("scan")) == 3

    def test_dropped_continuation_unwedges(self):
        h = Harness(make_store(users=150), page_size=100, queue_size=2).start()
        h.open_collection("users")
        h.worker.requests.put_nowait(ListCollections(h.dispatcher.session))
        h.worker.requests.put_nowait(ListCollections(h.dispatcher.session))
        h.dispatcher.records.selection.selected = 98

        h.press("j", pump=False)

        records = h.dispatcher.records
        assert records.pagination.fetch_in_flight is False
        assert h.dispatcher.loading.loading is False
        assert ("Too many pending requests, try again.", "warning") in h.notices
        h.worker.requests.get_nowait()
        h.worker.requests.get_nowait()
        h.press("k", pump=False)
        h.press("j")
        assert len(records.records) == 150


    def test_failed_continuation_unwedges(self):
        h = Harness(make_store(users=150), page_size=100).start()
        h.open_collection("users")
        h.dispatcher.records.selection.selected = 98

        h.press("j", pump=False)
        request = h.worker.requests.get_nowait()
        assert isinstance(request, ScanPage)
        h.worker.responses.put_nowait(RequestFailed(request.session, request.kind, "connection reset"))
        h.dispatcher.poll()

        records = h.dispatcher.records
        assert records.pagination.fetch_in_flight is False
        assert records.pagination.has_more is True
        assert h.dispatcher.loading.loading is False
        assert ("Request failed: connection reset", "error") in h.notices
        h.press("k", pump=False)
        h.press("j")
        assert len(records.records) == 150

    def test_failed_background_request_is_silent(self):
        h = Harness(make_store(users=5)).start()
        h.open_collection("users")
        h.worker.responses.put_nowait(RequestFailed(h.dispatcher.session, "CountItems", "throttled"))
        h.dispatcher.poll()
        assert h.notices == []
        assert len(h.dispatcher.records.records) == 5


class TestRecordFilter:
    def test_filter_then_clear(self):
        h = Harness(make_store(users=100)).start()
        h.open_collection("users")
        h.press("slash", "/")
        h.type("0042")
        records = h.dispatcher.records
        assert [json.loads(record)["id"] for record in records.filtered] == ["users-0042"]
        assert records.status_text() == "Viewing 1 Items (Scanned: 100)"
        h.press("enter")
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert len(records.filtered) == 1
        h.press("c")
        assert len(records.filtered) == 100
        assert records.status_text() == "Fetched 100 Items (Scanned: 100)"

    def test_escape_clears(self):
        h = Harness(make_store(users=20)).start()
        h.open_collection("users")
        h.press("slash", "/")
        h.type("zzz")
        assert h.dispatcher.records.filtered == []
        h.press("escape")
        assert len(h.dispatcher.records.filtered) == 20

    def test_backspace_and_caret(self):
        h = Harness(make_store(users=20)).start()
        h.open_collection("users")
        h.press("slash", "/")
        h.type("0x7")
        h.press("left")
        h.press("backspace")
        assert h.dispatcher.records.filter.text == "07"


class TestQuery:
    def test_partition_and_sort_query(self):
        store = orders_store()
        h = Harness(store).start()
        h.open_collection("orders")
        h.press("s")
        assert h.dispatcher.mode == Mode.QUERY_RECORDS
        h.type("c2")
        h.press("tab")
        h.type("3")
        h.press("enter")
        records = h.dispatcher.records
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert [json.loads(record)["total"] for record in records.records] == [23]
        assert records.status_text().startswith("Viewing 1 Items")

        h.press("c")
        assert len(records.records) == 9
        assert records.showing_query_results is False

    def test_partition_only_query(self):
        h = Harness(orders_store()).start()
        h.open_collection("orders")
        h.press("s")
        h.type("c1")
        h.press("enter")
        assert len(h.dispatcher.records.records) == 3

    def test_empty_partition_value_runs_nothing(self):
        store = orders_store()
        h = Harness(store).start()
        h.open_collection("orders")
        h.press("s")
        h.press("enter")
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert store.calls_for("query") == []

    def test_table_without_keys_is_unsupported(self):
        store = orders_store()
        h = Harness(store).start()
        h.open_collection("events")
        h.press("s")
        h.type("x")
        assert h.dispatcher.records.query.partition.text == ""
        assert h.press("enter") is False
        h.press("escape")
        assert h.dispatcher.mode == Mode.SELECT_RECORD
        assert store.calls_for("query") == []


class TestDetail:
    def test_open_expand_copy_close(self):
        h = Harness(InMemoryStore([InMemoryTable("docs", [{"id": "d1", "meta": {"a": 1, "b": [2, 3]}}])])).start()
        h.open_collection("docs")
        h.press("enter")
        detail = h.dispatcher.detail
        assert h.dispatcher.mode == Mode.VIEW_RECORD
        assert [row.key for row in detail.rows] == [None, "id", "meta"]

        h.press("Z")
        assert [row.key for row in detail.rows] == [None, "id", "meta", "a", "b", 0, 1]
        h.press("z")
        assert len(detail.rows) == 3

        h.press("j")
        h.press("y")
        assert h.copied[-1] == "d1"
        h.press("Y")
        assert json.loads(h.copied[-1]) == {"id": "d1", "meta": {"a": 1, "b": [2, 3]}}

        h.press("escape")
        assert h.dispatcher.mode == Mode.SELECT_RECORD

    def test_copy_from_list(self):
        h = Harness(make_store(users=2)).start()
        h.open_collection("users")
        h.press("y")
        assert json.loads(h.copied[-1])["id"] == "users-0000"
        assert ("Copied to clipboard", "information") in h.notices


class TestApply:
    def test_components_see_messages_in_order(self):
        h = Harness(make_store(users=1))
        seen: list[str] = []
        for component in h.dispatcher.components:
            original = component.update

            def record(message, component=component, original=original):
                seen.append(type(component).__name__)
                return original(message)

            component.update = record
        h.dispatcher.apply(m.Tick())
        assert seen == [
            "CollectionsPane",
            "CollectionFilterInput",
            "RecordsPane",
            "LoadingIndicator",
            "DetailPane",
            "StatusBar",
        ]
