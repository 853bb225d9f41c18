"""Build the store client the explorer talks to."""

from __future__ import annotations

from dynamit.domains.store.memory import build_demo_store
from dynamit.domains.store.protocols import StoreClient
from dynamit.shared.app.runtime import RuntimeConfig
from dynamit.shared.core.debug_events import emit_debug_event


def build_store(runtime: RuntimeConfig) -> StoreClient:
    """Seeded in-memory store in mock mode, DynamoDB otherwise."""
    if runtime.mock.enabled:
        emit_debug_event("store.mock", category="store", rows=runtime.mock.demo_rows)
        return build_demo_store(runtime.mock.demo_rows, region=runtime.region, delay=runtime.mock.query_delay)

    from dynamit.domains.store.dynamodb import DynamoDBStore

    return DynamoDBStore.from_runtime(runtime)
