from __future__ import annotations

from ca_ui.tui.core.protocols import PresenterSink

LEVELS = ("info", "warning", "error", "success")


class Presenter:
    """Single-line notices tagged with a severity, forwarded to a sink."""

    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def notify(self, level: str, message: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown notice level: {level!r}")
        # Notices are one line; providers sometimes send multi-line titles.
        self._sink.emit(level, " ".join(message.splitlines()))

    def info(self, message: str) -> None:
        self.notify("info", message)

    def warning(self, message: str) -> None:
        self.notify("warning", message)

    def error(self, message: str) -> None:
        self.notify("error", message)

    def success(self, message: str) -> None:
        self.notify("success", message)


__all__ = ["LEVELS", "Presenter"]
