"""Translate normalized key events into dispatcher messages."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dynamit.core import messages as m
from dynamit.core.binding_contexts import get_binding_contexts
from dynamit.core.input_context import InputContext
from dynamit.core.keymap import KeymapProvider, get_keymap
from dynamit.core.modes import Mode
from dynamit.shared.core.debug_events import emit_debug_event

if TYPE_CHECKING:
    from dynamit.domains.shell.state import UIStateMachine


@dataclass(frozen=True)
class KeyEvent:
    """A key press: named key plus the character it produced, if any."""

    key: str
    character: str | None = None
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_printable(self) -> bool:
        if self.ctrl or self.alt or not self.character or len(self.character) != 1:
            return False
        return self.character.isprintable()

    @classmethod
    def from_textual(cls, key: str, character: str | None) -> KeyEvent:
        return cls(
            key=key,
            character=character,
            ctrl="ctrl+" in key,
            alt="alt+" in key,
            shift="shift+" in key or (character is not None and character.isupper()),
        )


ACTION_MESSAGES: dict[str, Callable[[], m.Message]] = {
    "quit": m.Quit,
    "show_help": m.ShowHelp,
    "select_next": m.SelectNext,
    "select_previous": m.SelectPrevious,
    "select_first": m.SelectFirst,
    "select_last": m.SelectLast,
    "scroll_down": m.ScrollDown,
    "scroll_up": m.ScrollUp,
    "choose_collection": m.ChooseCollection,
    "filter_collections": lambda: m.EnterMode(Mode.FILTER_COLLECTIONS),
    "refresh_collections": m.FetchCollections,
    "submit_text": m.SubmitText,
    "cancel_text": m.CancelText,
    "delete_character": m.DeleteCharacter,
    "caret_left": m.CaretLeft,
    "caret_right": m.CaretRight,
    "open_record": m.OpenRecord,
    "filter_records": lambda: m.EnterMode(Mode.FILTER_RECORDS),
    "query_records": lambda: m.EnterMode(Mode.QUERY_RECORDS),
    "clear_record_filter": m.ClearRecordFilter,
    "copy_record": m.CopyRecord,
    "back_to_collections": lambda: m.EnterMode(Mode.SELECT_COLLECTION),
    "toggle_query_focus": m.ToggleQueryFocus,
    "toggle_node": m.ToggleNode,
    "expand_all": m.ExpandAll,
    "collapse_all": m.CollapseAll,
    "scroll_left": m.ScrollLeft,
    "scroll_right": m.ScrollRight,
    "copy_node_value": m.CopyNodeValue,
    "close_detail": m.CloseDetail,
}


def resolve_action(
    event: KeyEvent,
    ctx: InputContext,
    machine: UIStateMachine,
    keymap: KeymapProvider | None = None,
) -> str | None:
    """First action bound to the key in an active context that the state allows."""
    keymap = keymap or get_keymap()
    for action in keymap.actions_for_key(event.key, get_binding_contexts(ctx)):
        if machine.check_action(ctx, action):
            return action
    return None


def translate_key(
    event: KeyEvent,
    ctx: InputContext,
    machine: UIStateMachine,
    keymap: KeymapProvider | None = None,
) -> m.Message | None:
    """Map a key to a message for the active mode.

    Text entry modes turn unbound printable keys into typed characters.
    """
    action = resolve_action(event, ctx, machine, keymap)
    if action is not None:
        emit_debug_event("key.action", category="keybinding", key=event.key, action=action, mode=ctx.mode.value)
        return ACTION_MESSAGES[action]()
    if ctx.mode.is_text_entry and event.is_printable and event.character:
        return m.InsertCharacter(event.character)
    return None
