"""List and text-input widgets for dynamit.

The widgets hold no explorer state. The app pushes view data into them after
every dispatcher step and they turn it into rich Text.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual.widgets import Static

from dynamit.shared.filtering import highlight_indices


def visible_window(total: int, anchor: int, height: int) -> tuple[int, int]:
    """Half-open slice of ``total`` rows of ``height`` that keeps ``anchor`` in view."""
    if total <= 0 or height <= 0:
        return 0, 0
    if total <= height:
        return 0, total
    anchor = max(0, min(anchor, total - 1))
    start = max(0, min(anchor - height // 2, total - height))
    return start, start + height


def highlighted(text: str, filter_text: str, *, style: str = "bold yellow") -> Text:
    label = Text(text)
    for index in highlight_indices(text, filter_text):
        label.stylize(style, index, index + 1)
    return label


class ListPanel(Static):
    """Bordered list with a single highlighted row."""

    DEFAULT_CSS = """
    ListPanel {
        height: 1fr;
        border: round $primary-darken-2;
        padding: 0 1;
    }

    ListPanel.active {
        border: round $accent;
    }
    """

    def __init__(self, title: str = "", *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__("", id=id, classes=classes, markup=False)
        self.border_title = title
        self._rows: list[str] = []
        self._selected: int | None = None
        self._anchor = 0
        self._filter_text = ""
        self._empty_text = ""

    @property
    def rows(self) -> list[str]:
        return self._rows

    def set_rows(
        self,
        rows: Sequence[str],
        selected: int | None,
        *,
        anchor: int = 0,
        filter_text: str = "",
        empty_text: str = "",
        title: str | None = None,
        subtitle: str = "",
    ) -> None:
        self._rows = list(rows)
        self._selected = selected
        self._anchor = selected if selected is not None else anchor
        self._filter_text = filter_text
        self._empty_text = empty_text
        if title is not None:
            self.border_title = title
        self.border_subtitle = subtitle
        self.update(self._render_rows())

    def _render_rows(self) -> Text:
        if not self._rows:
            return Text(self._empty_text, style="dim italic")
        height = max(1, self.content_size.height or len(self._rows))
        start, end = visible_window(len(self._rows), self._anchor, height)
        body = Text(no_wrap=True, overflow="ellipsis")
        for index in range(start, end):
            line = highlighted(self._rows[index], self._filter_text)
            if index == self._selected:
                line.stylize("reverse")
            body.append_text(line)
            if index < end - 1:
                body.append("\n")
        return body

    def on_resize(self) -> None:
        self.update(self._render_rows())


def caret_text(text: str, caret: int, *, focused: bool = True) -> Text:
    """Input text with the caret drawn as a reversed cell."""
    line = Text(text)
    if not focused:
        return line
    if caret >= len(text):
        line.append(" ", style="reverse")
    else:
        line.stylize("reverse", caret, caret + 1)
    return line


class InputLine(Static):
    """One-line text input drawn from (text, caret); hidden unless shown."""

    DEFAULT_CSS = """
    InputLine {
        display: none;
        height: 1;
        padding: 0 1;
    }

    InputLine.visible {
        display: block;
    }
    """

    def __init__(self, prompt: str = "/", *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__("", id=id, classes=classes, markup=False)
        self.prompt = prompt

    def show(self, text: str, caret: int, *, focused: bool = True) -> None:
        line = Text(self.prompt, style="bold")
        line.append_text(caret_text(text, caret, focused=focused))
        self.update(line)
        self.add_class("visible")

    def hide(self) -> None:
        self.remove_class("visible")


class QueryFormLine(Static):
    """Partition/sort key inputs of the query form."""

    DEFAULT_CSS = """
    QueryFormLine {
        display: none;
        height: auto;
        padding: 0 1;
        border: round $accent;
        border-title-color: $accent;
    }

    QueryFormLine.visible {
        display: block;
    }
    """

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__("", id=id, classes=classes, markup=False)
        self.border_title = "Query"

    def show(self, fields: Sequence[tuple[str, str, int, bool]], unsupported_text: str | None = None) -> None:
        if unsupported_text is not None:
            self.update(Text(unsupported_text, style="bold red"))
        else:
            body = Text()
            for index, (label, text, caret, focused) in enumerate(fields):
                body.append(f"{label} = ", style="bold cyan" if focused else "dim")
                body.append_text(caret_text(text, caret, focused=focused))
                if index < len(fields) - 1:
                    body.append("\n")
            self.update(body)
        self.add_class("visible")

    def hide(self) -> None:
        self.remove_class("visible")
