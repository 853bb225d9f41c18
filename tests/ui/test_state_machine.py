"""Tests for state machine action validation and key routing."""

from __future__ import annotations

from dynamit.core import messages as m
from dynamit.core.input_context import InputContext
from dynamit.core.key_router import KeyEvent, resolve_action, translate_key
from dynamit.core.keymap import ActionKeyDef, KeymapProvider, format_key, get_keymap, set_keymap
from dynamit.core.modes import Mode
from dynamit.domains.shell.state import UIStateMachine


def make_context(mode: Mode = Mode.SELECT_COLLECTION, **overrides: object) -> InputContext:
    """Build a default InputContext with optional overrides."""
    return InputContext(mode=mode, **overrides)  # type: ignore[arg-type]


def key(name: str, character: str | None = None) -> KeyEvent:
    if character is None and len(name) == 1:
        character = name
    return KeyEvent.from_textual(name, character)


class TestActionValidation:
    def test_choose_collection_needs_collections(self):
        sm = UIStateMachine()
        assert sm.check_action(make_context(), "choose_collection") is False
        assert sm.check_action(make_context(has_collections=True), "choose_collection") is True

    def test_refresh_blocked_while_loading(self):
        sm = UIStateMachine()
        assert sm.check_action(make_context(loading=True), "refresh_collections") is False

    def test_quit_allowed_everywhere(self):
        sm = UIStateMachine()
        for mode in Mode:
            assert sm.check_action(make_context(mode), "quit") is True

    def test_record_actions_scoped_to_record_mode(self):
        sm = UIStateMachine()
        ctx = make_context(has_records=True, has_record_selected=True)
        assert sm.check_action(ctx, "open_record") is False
        ctx = make_context(Mode.SELECT_RECORD, has_records=True, has_record_selected=True)
        assert sm.check_action(ctx, "open_record") is True
        assert sm.check_action(ctx, "toggle_node") is False

    def test_clear_needs_active_filter(self):
        sm = UIStateMachine()
        assert sm.check_action(make_context(Mode.SELECT_RECORD), "clear_record_filter") is False
        ctx = make_context(Mode.SELECT_RECORD, record_filter_active=True)
        assert sm.check_action(ctx, "clear_record_filter") is True

    def test_query_focus_needs_both_keys(self):
        sm = UIStateMachine()
        ctx = make_context(Mode.QUERY_RECORDS, has_partition_key=True)
        assert sm.check_action(ctx, "toggle_query_focus") is False
        ctx = make_context(Mode.QUERY_RECORDS, has_partition_key=True, has_sort_key=True)
        assert sm.check_action(ctx, "toggle_query_focus") is True

    def test_active_state_per_mode(self):
        sm = UIStateMachine()
        names = {mode: type(sm.get_active_state(make_context(mode))).__name__ for mode in Mode}
        assert names == {
            Mode.SELECT_COLLECTION: "CollectionSelectState",
            Mode.FILTER_COLLECTIONS: "CollectionFilterState",
            Mode.SELECT_RECORD: "RecordSelectState",
            Mode.FILTER_RECORDS: "RecordFilterState",
            Mode.QUERY_RECORDS: "RecordQueryState",
            Mode.VIEW_RECORD: "RecordDetailState",
        }

    def test_footer_shows_allowed_bindings(self):
        sm = UIStateMachine()
        left, right = sm.get_display_bindings(make_context(has_collections=True))
        assert [b.action for b in left][:2] == ["choose_collection", "filter_collections"]
        assert left[0].key == "<enter>"
        assert [b.action for b in right] == ["show_help", "quit"]

    def test_help_entries_cover_every_category(self):
        categories = {entry.category for entry in UIStateMachine().get_help_entries()}
        assert categories == {"Global", "Tables", "Items", "Query", "Item"}


    def test_help_text_groups_bindings(self):
        text = UIStateMachine().generate_help_text()
        assert text.index("TABLES") < text.index("ITEMS") < text.index("GLOBAL")
        assert text.count("Show this help") == 1
        assert "Open the highlighted table" in text


class TestKeyRouting:
    def test_bound_key_in_active_mode(self):
        sm = UIStateMachine()
        ctx = make_context(Mode.SELECT_RECORD, has_records=True)
        assert translate_key(key("j"), ctx, sm) == m.SelectNext()
        assert translate_key(key("ctrl+d"), ctx, sm) == m.ScrollDown()

    def test_same_key_differs_by_mode(self):
        sm = UIStateMachine()
        assert resolve_action(key("enter"), make_context(has_collections=True), sm) == "choose_collection"
        ctx = make_context(Mode.VIEW_RECORD, detail_has_rows=True)
        assert resolve_action(key("enter"), ctx, sm) == "toggle_node"

    def test_printable_keys_type_in_text_modes(self):
        sm = UIStateMachine()
        ctx = make_context(Mode.FILTER_RECORDS)
        assert translate_key(key("j"), ctx, sm) == m.InsertCharacter("j")
        assert translate_key(key("space", " "), ctx, sm) == m.InsertCharacter(" ")
        assert translate_key(key("slash", "/"), ctx, sm) == m.InsertCharacter("/")

    def test_question_mark_types_or_opens_help(self):
        sm = UIStateMachine()
        question = key("question_mark", "?")
        assert translate_key(question, make_context(Mode.FILTER_RECORDS), sm) == m.InsertCharacter("?")
        assert translate_key(question, make_context(Mode.SELECT_RECORD), sm) == m.ShowHelp()

    def test_unbound_key_outside_text_modes_is_ignored(self):
        sm = UIStateMachine()
        assert translate_key(key("x"), make_context(Mode.SELECT_RECORD), sm) is None

    def test_guarded_action_is_not_translated(self):
        sm = UIStateMachine()
        assert translate_key(key("enter"), make_context(), sm) is None

    def test_mode_switch_messages(self):
        sm = UIStateMachine()
        msg = translate_key(key("slash", "/"), make_context(), sm)
        assert msg == m.EnterMode(Mode.FILTER_COLLECTIONS)

    def test_ctrl_keys_are_not_typed(self):
        assert key("ctrl+a", "\x01").is_printable is False


class TestKeymap:
    def test_format_key(self):
        assert format_key("slash") == "/"
        assert format_key("ctrl+d") == "^d"
        assert format_key("G") == "G"

    def test_primary_key_first(self):
        keymap = get_keymap()
        assert keymap.action("select_next") == "j"
        assert keymap.action("open_record") == "enter"

    def test_custom_keymap(self):
        class OneKey(KeymapProvider):
            def get_action_keys(self) -> list[ActionKeyDef]:
                return [ActionKeyDef("x", "quit", "global")]

        set_keymap(OneKey())
        sm = UIStateMachine()
        assert translate_key(key("x"), make_context(), sm) == m.Quit()
        assert translate_key(key("q"), make_context(), sm) is None
