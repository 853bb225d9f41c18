"""System clipboard access."""

from __future__ import annotations

import sys
from collections.abc import Callable

from dynamit.shared.core.debug_events import emit_debug_event

_internal_clipboard: str = ""


def internal_clipboard() -> str:
    """The last text passed to copy_text, whether or not the system took it."""
    return _internal_clipboard


def copy_text(text: str, terminal_copy: Callable[[str], None] | None = None) -> bool:
    """Copy text to the clipboard if possible, otherwise store it internally.

    ``terminal_copy`` is the UI's own clipboard hook (Textual's
    ``copy_to_clipboard``, which uses OSC 52 where the terminal supports it).
    """
    global _internal_clipboard
    _internal_clipboard = text

    if sys.platform == "darwin":
        # Prefer pyperclip on macOS; Textual's copy_to_clipboard can no-op.
        if _pyperclip_copy(text):
            return True

    if terminal_copy is not None:
        try:
            terminal_copy(text)
            return True
        except Exception as exc:
            emit_debug_event("clipboard.terminal_failed", category="clipboard", error=str(exc))

    return _pyperclip_copy(text)


def _pyperclip_copy(text: str) -> bool:
    try:
        import pyperclip

        pyperclip.copy(text)
        return True
    except Exception as exc:
        emit_debug_event("clipboard.pyperclip_failed", category="clipboard", error=str(exc))
        return False
