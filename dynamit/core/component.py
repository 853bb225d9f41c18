"""Base class for the stateful explorer components."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from dynamit.core.messages import EnterMode, Message
from dynamit.core.modes import Mode

# Handlers take the concrete message type they are registered for.
Handler = Callable[[Any], Iterable[Message] | None]


class Component:
    """A piece of explorer state updated by dispatcher messages.

    Subclasses return a ``{message type: handler}`` table from ``handlers``.
    Handlers may return follow-up messages, which the dispatcher applies
    later in the same pass. Every component tracks the active mode.
    """

    def __init__(self) -> None:
        self.mode = Mode.SELECT_COLLECTION
        self._handlers: dict[type[Message], Handler] = self.handlers()

    def handlers(self) -> dict[type[Message], Handler]:
        return {}

    def update(self, message: Message) -> list[Message]:
        if isinstance(message, EnterMode):
            self.mode = message.mode
        handler = self._handlers.get(type(message))
        if handler is None:
            return []
        return list(handler(message) or ())
