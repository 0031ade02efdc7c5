"""Collaborator protocols consumed by the protocol layer."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class Notifier(Protocol):
    """Single-line notices with a severity level."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class EditApplier(Protocol):
    """Applies a workspace edit to the underlying documents."""

    def apply(self, edit: Mapping[str, Any], offset_encoding: str) -> None: ...
