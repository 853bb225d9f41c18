"""Record tree widget for dynamit."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.highlighter import ReprHighlighter
from rich.text import Text
from textual.widgets import Static

from dynamit.domains.detail.tree import TreeRow
from dynamit.shared.ui.widgets import visible_window

INDENT = "  "

_highlighter = ReprHighlighter()


def format_value(value: Any) -> Text:
    """Format a leaf value with syntax highlighting."""
    if value is None:
        return Text("null", style="italic dim")
    elif isinstance(value, bool):
        return Text(str(value).lower(), style="italic cyan")
    elif isinstance(value, int | float):
        return Text(str(value), style="bold blue")
    elif isinstance(value, str):
        return Text(f'"{value}"', style="green")
    else:
        return _highlighter(repr(value))


def row_label(row: TreeRow) -> Text:
    """One line of the tree: indentation, marker, key and value summary."""
    label = Text(INDENT * row.depth)
    if row.expandable:
        label.append("▼ " if row.expanded else "▶ ", style="dim")
    else:
        label.append("  ")

    key = "item" if row.key is None else row.key
    key_text = f"[{key}]" if isinstance(key, int) else str(key)

    if isinstance(row.value, dict):
        label.append("{} ", style="bold cyan")
        label.append(key_text)
        label.append(f" ({len(row.value)})", style="dim")
    elif isinstance(row.value, list):
        label.append("[] ", style="bold magenta")
        label.append(key_text)
        label.append(f" ({len(row.value)})", style="dim")
    else:
        label.append(key_text, style="bold")
        label.append(": ", style="dim")
        label.append_text(format_value(row.value))
    return label


def render_rows(rows: Sequence[TreeRow], selected: int | None, *, start: int = 0, end: int | None = None, offset: int = 0) -> Text:
    end = len(rows) if end is None else end
    body = Text(no_wrap=True, overflow="crop")
    for index in range(start, end):
        line = row_label(rows[index])
        if offset:
            line = line[offset:]
        if index == selected:
            line.stylize("reverse")
        body.append_text(line)
        if index < end - 1:
            body.append("\n")
    return body


class RecordTreePanel(Static):
    """Visible rows of the open record; hidden unless a record is open."""

    DEFAULT_CSS = """
    RecordTreePanel {
        display: none;
        height: 1fr;
        border: round $accent;
        padding: 0 1;
    }

    RecordTreePanel.visible {
        display: block;
    }
    """

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__("", id=id, classes=classes, markup=False)
        self.border_title = "Item"
        self._rows: list[TreeRow] = []
        self._selected: int | None = None
        self._offset = 0
        self._empty_text = ""

    def show(self, rows: Sequence[TreeRow], selected: int | None, *, offset: int = 0, empty_text: str = "") -> None:
        self._rows = list(rows)
        self._selected = selected
        self._offset = offset
        self._empty_text = empty_text
        self.add_class("visible")
        self.update(self._render_tree())

    def hide(self) -> None:
        self.remove_class("visible")

    def _render_tree(self) -> Text:
        if not self._rows:
            return Text(self._empty_text, style="bold red")
        height = max(1, self.content_size.height or len(self._rows))
        anchor = self._selected if self._selected is not None else 0
        start, end = visible_window(len(self._rows), anchor, height)
        return render_rows(self._rows, self._selected, start=start, end=end, offset=self._offset)

    def on_resize(self) -> None:
        if self._rows:
            self.update(self._render_tree())
