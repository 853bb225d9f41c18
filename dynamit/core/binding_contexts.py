"""Resolve active keybinding contexts from the input context."""

from __future__ import annotations

from dynamit.core.input_context import InputContext


def get_binding_contexts(ctx: InputContext) -> set[str]:
    """Determine which keybinding contexts should be active."""
    return {"global", ctx.mode.value}
