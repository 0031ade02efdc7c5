from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import pytest


@dataclass
class RecordingNotifier:
    messages: list[tuple[str, str]] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))


@dataclass
class RecordingEdits:
    applied: list[tuple[Mapping[str, Any], str]] = field(default_factory=list)

    def apply(self, edit: Mapping[str, Any], offset_encoding: str) -> None:
        self.applied.append((edit, offset_encoding))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def edits() -> RecordingEdits:
    return RecordingEdits()
