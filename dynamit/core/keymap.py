"""Core keymap definitions (UI-agnostic)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from dynamit.shared.core.debug_events import emit_debug_event

KEY_DISPLAY_OVERRIDES: dict[str, str] = {
    "question_mark": "?",
    "slash": "/",
    "space": "<space>",
    "escape": "<esc>",
    "enter": "<enter>",
    "backspace": "<backspace>",
    "tab": "<tab>",
    "left": "<left>",
    "right": "<right>",
    "up": "<up>",
    "down": "<down>",
    "home": "<home>",
    "end": "<end>",
    "pageup": "<pgup>",
    "pagedown": "<pgdn>",
}


def format_key(key: str) -> str:
    """Format a key name for display in UI hints."""
    if key in KEY_DISPLAY_OVERRIDES:
        return KEY_DISPLAY_OVERRIDES[key]
    if key.startswith("ctrl+"):
        return f"^{key.split('+', 1)[1]}"
    return key


@dataclass
class ActionKeyDef:
    """Definition of a regular action keybinding."""

    key: str  # The key to press
    action: str  # The action name
    context: str | None = None  # Binding context (a mode name or "global")
    primary: bool = True  # Primary key for display vs secondary aliases


class KeymapProvider(ABC):
    """Abstract base class for keymap providers."""

    @abstractmethod
    def get_action_keys(self) -> list[ActionKeyDef]:
        """Get all action key definitions."""
        raise NotImplementedError

    def action(self, action_name: str) -> str | None:
        """Get the key for an action."""
        primary = None
        fallback = None
        for ak in self.get_action_keys():
            if ak.action != action_name:
                continue
            if fallback is None:
                fallback = ak.key
            if ak.primary and primary is None:
                primary = ak.key
        return primary or fallback

    def actions_for_key(self, key: str, contexts: set[str] | None = None) -> list[str]:
        """Get all actions bound to a key, optionally limited to some contexts."""
        return [
            ak.action
            for ak in self.get_action_keys()
            if ak.key == key and (contexts is None or ak.context in contexts)
        ]


class DefaultKeymapProvider(KeymapProvider):
    """Default keymap with hardcoded bindings."""

    def __init__(self) -> None:
        self._action_keys_cache: list[ActionKeyDef] | None = None
        self._action_emitted: bool = False

    def _emit_action_keybindings(self, bindings: list[ActionKeyDef]) -> None:
        for binding in bindings:
            emit_debug_event(
                "keybinding.register",
                category="keybinding",
                provider=self.__class__.__name__,
                key=binding.key,
                action=binding.action,
                context=binding.context,
                primary=binding.primary,
            )

    def _ensure_action_keys(self) -> list[ActionKeyDef]:
        if self._action_keys_cache is None:
            self._action_keys_cache = self._build_action_keys()
        return self._action_keys_cache

    def get_action_keys(self) -> list[ActionKeyDef]:
        bindings = self._ensure_action_keys()
        if not self._action_emitted:
            self._emit_action_keybindings(bindings)
            self._action_emitted = True
        return list(bindings)

    def _build_action_keys(self) -> list[ActionKeyDef]:
        return [
            # Global
            ActionKeyDef("ctrl+c", "quit", "global"),
            ActionKeyDef("question_mark", "show_help", "global"),
            # Table list
            ActionKeyDef("j", "select_next", "select_collection"),
            ActionKeyDef("down", "select_next", "select_collection", primary=False),
            ActionKeyDef("k", "select_previous", "select_collection"),
            ActionKeyDef("up", "select_previous", "select_collection", primary=False),
            ActionKeyDef("g", "select_first", "select_collection"),
            ActionKeyDef("home", "select_first", "select_collection", primary=False),
            ActionKeyDef("G", "select_last", "select_collection"),
            ActionKeyDef("end", "select_last", "select_collection", primary=False),
            ActionKeyDef("enter", "choose_collection", "select_collection"),
            ActionKeyDef("l", "choose_collection", "select_collection", primary=False),
            ActionKeyDef("right", "choose_collection", "select_collection", primary=False),
            ActionKeyDef("slash", "filter_collections", "select_collection"),
            ActionKeyDef("r", "refresh_collections", "select_collection"),
            ActionKeyDef("q", "quit", "select_collection"),
            ActionKeyDef("escape", "quit", "select_collection", primary=False),
            # Table filter
            ActionKeyDef("enter", "submit_text", "filter_collections"),
            ActionKeyDef("escape", "cancel_text", "filter_collections"),
            ActionKeyDef("backspace", "delete_character", "filter_collections"),
            ActionKeyDef("left", "caret_left", "filter_collections"),
            ActionKeyDef("right", "caret_right", "filter_collections"),
            ActionKeyDef("down", "select_next", "filter_collections"),
            ActionKeyDef("up", "select_previous", "filter_collections"),
            # Item list
            ActionKeyDef("j", "select_next", "select_record"),
            ActionKeyDef("down", "select_next", "select_record", primary=False),
            ActionKeyDef("k", "select_previous", "select_record"),
            ActionKeyDef("up", "select_previous", "select_record", primary=False),
            ActionKeyDef("g", "select_first", "select_record"),
            ActionKeyDef("home", "select_first", "select_record", primary=False),
            ActionKeyDef("G", "select_last", "select_record"),
            ActionKeyDef("end", "select_last", "select_record", primary=False),
            ActionKeyDef("ctrl+d", "scroll_down", "select_record"),
            ActionKeyDef("pagedown", "scroll_down", "select_record", primary=False),
            ActionKeyDef("ctrl+u", "scroll_up", "select_record"),
            ActionKeyDef("pageup", "scroll_up", "select_record", primary=False),
            ActionKeyDef("enter", "open_record", "select_record"),
            ActionKeyDef("l", "open_record", "select_record", primary=False),
            ActionKeyDef("right", "open_record", "select_record", primary=False),
            ActionKeyDef("slash", "filter_records", "select_record"),
            ActionKeyDef("s", "query_records", "select_record"),
            ActionKeyDef("c", "clear_record_filter", "select_record"),
            ActionKeyDef("y", "copy_record", "select_record"),
            ActionKeyDef("escape", "back_to_collections", "select_record"),
            ActionKeyDef("q", "back_to_collections", "select_record", primary=False),
            ActionKeyDef("h", "back_to_collections", "select_record", primary=False),
            ActionKeyDef("left", "back_to_collections", "select_record", primary=False),
            # Item filter
            ActionKeyDef("enter", "submit_text", "filter_records"),
            ActionKeyDef("escape", "cancel_text", "filter_records"),
            ActionKeyDef("backspace", "delete_character", "filter_records"),
            ActionKeyDef("left", "caret_left", "filter_records"),
            ActionKeyDef("right", "caret_right", "filter_records"),
            # Key query form
            ActionKeyDef("enter", "submit_text", "query_records"),
            ActionKeyDef("escape", "cancel_text", "query_records"),
            ActionKeyDef("backspace", "delete_character", "query_records"),
            ActionKeyDef("left", "caret_left", "query_records"),
            ActionKeyDef("right", "caret_right", "query_records"),
            ActionKeyDef("tab", "toggle_query_focus", "query_records"),
            # Item detail
            ActionKeyDef("j", "select_next", "view_record"),
            ActionKeyDef("down", "select_next", "view_record", primary=False),
            ActionKeyDef("k", "select_previous", "view_record"),
            ActionKeyDef("up", "select_previous", "view_record", primary=False),
            ActionKeyDef("g", "select_first", "view_record"),
            ActionKeyDef("home", "select_first", "view_record", primary=False),
            ActionKeyDef("G", "select_last", "view_record"),
            ActionKeyDef("end", "select_last", "view_record", primary=False),
            ActionKeyDef("ctrl+d", "scroll_down", "view_record"),
            ActionKeyDef("pagedown", "scroll_down", "view_record", primary=False),
            ActionKeyDef("ctrl+u", "scroll_up", "view_record"),
            ActionKeyDef("pageup", "scroll_up", "view_record", primary=False),
            ActionKeyDef("enter", "toggle_node", "view_record"),
            ActionKeyDef("space", "toggle_node", "view_record", primary=False),
            ActionKeyDef("Z", "expand_all", "view_record"),
            ActionKeyDef("z", "collapse_all", "view_record"),
            ActionKeyDef("h", "scroll_left", "view_record"),
            ActionKeyDef("left", "scroll_left", "view_record", primary=False),
            ActionKeyDef("l", "scroll_right", "view_record"),
            ActionKeyDef("right", "scroll_right", "view_record", primary=False),
            ActionKeyDef("y", "copy_node_value", "view_record"),
            ActionKeyDef("Y", "copy_record", "view_record"),
            ActionKeyDef("escape", "close_detail", "view_record"),
            ActionKeyDef("q", "close_detail", "view_record", primary=False),
        ]


# Global keymap instance
_keymap_provider: KeymapProvider | None = None


def get_keymap() -> KeymapProvider:
    """Get the current keymap provider."""
    global _keymap_provider
    if _keymap_provider is None:
        _keymap_provider = DefaultKeymapProvider()
    return _keymap_provider


def set_keymap(provider: KeymapProvider) -> None:
    """Set the keymap provider (for testing or custom keymaps)."""
    global _keymap_provider
    _keymap_provider = provider


def reset_keymap() -> None:
    """Reset to default keymap provider."""
    global _keymap_provider
    _keymap_provider = None
