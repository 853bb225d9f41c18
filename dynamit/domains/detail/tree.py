"""Flatten a JSON record into visible tree rows with path-keyed expansion memory."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from dynamit.shared.selection import Selection

PathPart = str | int
NodePath = tuple[PathPart, ...]
ExpansionMemory = dict[NodePath, bool]


@dataclass(frozen=True)
class TreeRow:
    """One visible row of the record tree.

    Attributes:
        key: Object key or array index of this node (None for the record root)
        value: The JSON value at this node
        depth: Indentation depth, 0 for the root
        expanded: Whether the children of this node are shown
        path: Keys/indices leading from the root to this node
    """

    key: PathPart | None
    value: Any
    depth: int
    expanded: bool
    path: NodePath

    @property
    def expandable(self) -> bool:
        return isinstance(self.value, dict | list)


def _children(value: Any) -> Iterator[tuple[PathPart, Any]]:
    if isinstance(value, dict):
        yield from value.items()
    elif isinstance(value, list):
        yield from enumerate(value)


def _append(
    rows: list[TreeRow],
    key: PathPart,
    value: Any,
    depth: int,
    path: NodePath,
    memory: ExpansionMemory,
) -> None:
    expandable = isinstance(value, dict | list)
    expanded = expandable and memory.get(path, False)
    rows.append(TreeRow(key=key, value=value, depth=depth, expanded=expanded, path=path))
    if expanded:
        for child_key, child in _children(value):
            _append(rows, child_key, child, depth + 1, path + (child_key,), memory)


def build_rows(root: Any, memory: ExpansionMemory) -> list[TreeRow]:
    """Visible rows for a parsed record.

    The root is always the first row and always expanded; nested objects and
    arrays show their children only when their path is expanded in ``memory``.
    """
    rows = [TreeRow(key=None, value=root, depth=0, expanded=isinstance(root, dict | list), path=())]
    for key, child in _children(root):
        _append(rows, key, child, 1, (key,), memory)
    return rows


def container_paths(root: Any, path: NodePath = ()) -> Iterator[NodePath]:
    """Every path below the root that holds an object or array."""
    for key, child in _children(root):
        if isinstance(child, dict | list):
            child_path = path + (key,)
            yield child_path
            yield from container_paths(child, child_path)


def value_text(value: Any) -> str:
    """Text copied for a node: JSON for containers, plain text for scalars."""
    if isinstance(value, dict | list):
        return json.dumps(value, indent=2, ensure_ascii=False)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RecordTree:
    """The open record, its visible rows and the row selection.

    Expansion memory outlives individual records; a record with the same
    shape reopens with the same nodes expanded.
    """

    def __init__(self) -> None:
        self.record: str = ""
        self.root: Any = None
        self.valid: bool = False
        self.memory: ExpansionMemory = {}
        self.rows: list[TreeRow] = []
        self.selection = Selection()
        self.horizontal_offset: int = 0

    def load(self, record: str) -> None:
        self.record = record
        self.horizontal_offset = 0
        try:
            self.root = json.loads(record)
            self.valid = True
        except (json.JSONDecodeError, ValueError):
            self.root = None
            self.valid = False
        self.rebuild()
        self.selection.reset(len(self.rows))

    def clear(self) -> None:
        self.record = ""
        self.root = None
        self.valid = False
        self.rows = []
        self.selection.select_none()
        self.horizontal_offset = 0

    def rebuild(self) -> None:
        self.rows = build_rows(self.root, self.memory) if self.valid else []
        self.selection.clamp(len(self.rows))

    def toggle(self, path: NodePath) -> None:
        if path == ():
            return
        self.memory[path] = not self.memory.get(path, False)
        self.rebuild()

    def toggle_selected(self) -> None:
        row = self.selected_row
        if row is not None and row.expandable:
            self.toggle(row.path)

    def expand_all(self) -> None:
        if not self.valid:
            return
        for path in container_paths(self.root):
            self.memory[path] = True
        self.rebuild()

    def collapse_all(self) -> None:
        if not self.valid:
            return
        for path in container_paths(self.root):
            self.memory[path] = False
        self.rebuild()

    @property
    def selected_row(self) -> TreeRow | None:
        return self.selection.value(self.rows)

    def scroll_left(self, columns: int = 4) -> None:
        self.horizontal_offset = max(0, self.horizontal_offset - columns)

    def scroll_right(self, columns: int = 4) -> None:
        self.horizontal_offset += columns
