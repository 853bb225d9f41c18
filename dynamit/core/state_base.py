"""Base types for the hierarchical UI state machine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from dynamit.core.input_context import InputContext

Guard = Callable[[InputContext], bool]


class ActionResult(Enum):
    """Result of checking an action in a state."""

    ALLOWED = auto()  # Action is allowed
    FORBIDDEN = auto()  # A guard refused the action
    UNHANDLED = auto()  # State doesn't handle this action (delegate to parent)


@dataclass
class DisplayBinding:
    """A binding to display in the status line."""

    key: str  # Display key (e.g., "enter", "/", "<esc>")
    label: str  # Human-readable label (e.g., "Select", "Filter")
    action: str  # Action name for reference


@dataclass
class HelpEntry:
    """An entry for the help text."""

    key: str
    description: str
    category: str


@dataclass
class ActionSpec:
    """Specification for an action."""

    guard: Guard | None = None
    display_key: str | None = None
    display_label: str | None = None
    help_key: str | None = None
    help_description: str | None = None

    def is_allowed(self, app: InputContext) -> bool:
        if self.guard is None:
            return True
        return self.guard(app)

    def get_display_binding(self, action_name: str) -> DisplayBinding | None:
        if self.display_key and self.display_label:
            return DisplayBinding(
                key=self.display_key,
                label=self.display_label,
                action=action_name,
            )
        return None

    def get_help_entry(self, category: str) -> HelpEntry | None:
        if self.help_key and self.help_description:
            return HelpEntry(
                key=self.help_key,
                description=self.help_description,
                category=category,
            )
        return None


def resolve_display_key(action_name: str) -> str | None:
    """Resolve the primary key for an action from the active keymap, formatted for display."""
    from dynamit.core.keymap import format_key, get_keymap

    key = get_keymap().action(action_name)
    if key is None:
        return None
    return format_key(key)


class State(ABC):
    """Base class for hierarchical states."""

    # Override in subclasses to set the help category for this state's actions
    help_category: str | None = None

    def __init__(self, parent: State | None = None):
        self.parent = parent
        self._actions: dict[str, ActionSpec] = {}
        self._display_order: list[str] = []
        self._right_bindings: list[str] = []
        self._setup_actions()

    @abstractmethod
    def _setup_actions(self) -> None:
        """Override to define actions handled by this state."""

    def allows(
        self,
        action_name: str,
        guard: Guard | None = None,
        *,
        key: str | None = None,
        label: str | None = None,
        right: bool = False,
        help: str | None = None,
        help_key: str | None = None,
    ) -> None:
        """Register an action as allowed in this state.

        Args:
            action_name: The action identifier
            guard: Optional predicate that must return True for action to be allowed
            key: Display key for the status line (if shown)
            label: Display label for the status line (if shown)
            right: If True, show on right side of the status line
            help: Help description for the help text
            help_key: Override key displayed in help (defaults to key param)
        """
        if key is None and (label or help):
            key = resolve_display_key(action_name)
        self._actions[action_name] = ActionSpec(
            guard=guard,
            display_key=key,
            display_label=label,
            help_key=help_key or key,
            help_description=help,
        )
        if key and label:
            if right:
                self._right_bindings.append(action_name)
            else:
                self._display_order.append(action_name)

    def get_help_entries(self) -> list[HelpEntry]:
        entries = []
        if self.help_category:
            for spec in self._actions.values():
                entry = spec.get_help_entry(self.help_category)
                if entry:
                    entries.append(entry)
        return entries

    def check_action(self, app: InputContext, action_name: str) -> ActionResult:
        """Check if action is allowed in this state or ancestors."""
        if action_name in self._actions:
            spec = self._actions[action_name]
            if spec.is_allowed(app):
                return ActionResult.ALLOWED
            return ActionResult.FORBIDDEN

        if self.parent:
            return self.parent.check_action(app, action_name)

        return ActionResult.UNHANDLED

    def get_display_bindings(self, app: InputContext) -> tuple[list[DisplayBinding], list[DisplayBinding]]:
        """Get bindings to display (left, right), this state's first, then ancestors'."""
        left: list[DisplayBinding] = []
        right: list[DisplayBinding] = []
        seen: set[str] = set()

        for order, target in ((self._display_order, left), (self._right_bindings, right)):
            for action_name in order:
                if action_name in seen:
                    continue
                spec = self._actions.get(action_name)
                if spec and spec.is_allowed(app):
                    binding = spec.get_display_binding(action_name)
                    if binding:
                        target.append(binding)
                        seen.add(action_name)

        if self.parent:
            parent_left, parent_right = self.parent.get_display_bindings(app)
            for binding in parent_left:
                if binding.action not in seen:
                    left.append(binding)
                    seen.add(binding.action)
            for binding in parent_right:
                if binding.action not in seen:
                    right.append(binding)
                    seen.add(binding.action)

        return left, right

    @abstractmethod
    def is_active(self, app: InputContext) -> bool:
        """Return True if this state is currently active."""
