"""Shell-level components: loading spinner and status bar."""

from __future__ import annotations

from dynamit.core import messages as m
from dynamit.core.component import Component, Handler
from dynamit.core.modes import MODE_LABELS

SPINNER_FRAMES = "|/-\\"


class LoadingIndicator(Component):
    """Spinner shown while a store request is outstanding."""

    def __init__(self) -> None:
        super().__init__()
        self.loading = False
        self.text = ""
        self.frame = 0

    def handlers(self) -> dict[type[m.Message], Handler]:
        return {
            m.StartLoading: self._on_start,
            m.StopLoading: self._on_stop,
            m.RequestDropped: self._on_stop,
            m.Tick: self._on_tick,
        }

    def _on_start(self, message: m.StartLoading) -> None:
        self.loading = True
        self.text = message.message
        self.frame = 0

    def _on_stop(self, message: m.Message) -> None:
        self.loading = False
        self.text = ""

    def _on_tick(self, message: m.Message) -> None:
        if self.loading:
            self.frame = (self.frame + 1) % len(SPINNER_FRAMES)

    def view(self) -> str:
        if not self.loading:
            return ""
        return f"{SPINNER_FRAMES[self.frame]} {self.text}"


class StatusBar(Component):
    """Region indicator, mode label and the last notice."""

    def __init__(self, region: str) -> None:
        super().__init__()
        self.region = region
        self.notice = ""
        self.severity = "information"

    def handlers(self) -> dict[type[m.Message], Handler]:
        return {
            m.Notify: self._on_notify,
            m.EnterMode: self._on_enter_mode,
        }

    def _on_notify(self, message: m.Notify) -> None:
        self.notice = message.text
        self.severity = message.severity

    def _on_enter_mode(self, message: m.Message) -> None:
        self.notice = ""
        self.severity = "information"

    @property
    def mode_label(self) -> str:
        return MODE_LABELS[self.mode]

    def view(self) -> str:
        parts = [f"[{self.region}]", self.mode_label]
        if self.notice:
            parts.append(self.notice)
        return "  ".join(parts)
