"""Pytest fixtures for dynamit tests."""

from __future__ import annotations

import pytest

from dynamit.core.keymap import reset_keymap
from dynamit.shared.core.debug_events import clear_debug_events


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Ensure keymap overrides and debug history do not leak between tests."""
    reset_keymap()
    clear_debug_events()
    yield
    reset_keymap()
    clear_debug_events()


@pytest.fixture(autouse=True)
def _no_system_clipboard(monkeypatch: pytest.MonkeyPatch):
    """Keep pyperclip away from the real clipboard."""
    import pyperclip

    def _unavailable(text: str) -> None:
        raise pyperclip.PyperclipException("clipboard disabled in tests")

    monkeypatch.setattr(pyperclip, "copy", _unavailable)
