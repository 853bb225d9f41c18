"""Structured debug events recorded in memory and forwarded to logging."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

logger = logging.getLogger("dynamit")

MAX_HISTORY = 500


@dataclass(frozen=True)
class DebugEvent:
    """A single named event with free-form data."""

    name: str
    category: str
    timestamp: float
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp).isoformat(timespec="milliseconds")


_history: deque[DebugEvent] = deque(maxlen=MAX_HISTORY)
_lock = threading.Lock()


def format_debug_data(data: dict[str, Any]) -> str:
    """Render event data as `key=value` pairs, skipping empty values."""
    parts = []
    for key, value in data.items():
        if value is None or value == "":
            continue
        parts.append(f"{key}={value!r}" if isinstance(value, str) else f"{key}={value}")
    return " ".join(parts)


def emit_debug_event(name: str, *, category: str = "general", **data: Any) -> DebugEvent:
    """Record an event and log it at debug level.

    Safe to call from the fetch worker thread.
    """
    event = DebugEvent(name=name, category=category, timestamp=time.time(), data=data)
    with _lock:
        _history.append(event)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("[%s] %s %s", category, name, format_debug_data(data))
    return event


def get_debug_events(category: str | None = None) -> list[DebugEvent]:
    with _lock:
        events = list(_history)
    if category is None:
        return events
    return [event for event in events if event.category == category]


def clear_debug_events() -> None:
    with _lock:
        _history.clear()
