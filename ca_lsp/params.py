"""Code action request parameters for cursor and selection queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

CODE_ACTION_METHOD = "textDocument/codeAction"
RESOLVE_METHOD = "codeAction/resolve"


@dataclass(frozen=True)
class Position:
    line: int
    character: int

    def to_payload(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def to_payload(self) -> dict[str, Any]:
        return {"start": self.start.to_payload(), "end": self.end.to_payload()}


@dataclass(frozen=True)
class CodeActionParams:
    uri: str
    range: Range
    diagnostics: tuple[Mapping[str, Any], ...] = field(default=())

    def to_payload(self) -> dict[str, Any]:
        return {
            "textDocument": {"uri": self.uri},
            "range": self.range.to_payload(),
            "context": {"diagnostics": [dict(d) for d in self.diagnostics]},
        }


def _start_line(diagnostic: Mapping[str, Any]) -> int | None:
    try:
        return int(diagnostic["range"]["start"]["line"])
    except (KeyError, TypeError, ValueError):
        return None


def diagnostics_at_line(
    diagnostics: Iterable[Mapping[str, Any]], line: int
) -> tuple[Mapping[str, Any], ...]:
    """Return the diagnostics starting on ``line`` (zero-based)."""
    return tuple(d for d in diagnostics if _start_line(d) == line)


def cursor_params(
    uri: str,
    position: Position,
    diagnostics: Iterable[Mapping[str, Any]] = (),
) -> CodeActionParams:
    """Params for an empty range at the cursor."""
    return CodeActionParams(
        uri=uri,
        range=Range(position, position),
        diagnostics=diagnostics_at_line(diagnostics, position.line),
    )


def selection_params(
    uri: str,
    start: Position,
    end: Position,
    diagnostics: Iterable[Mapping[str, Any]] = (),
) -> CodeActionParams:
    """Params for a visual selection; diagnostics come from its first line."""
    if (end.line, end.character) < (start.line, start.character):
        start, end = end, start
    return CodeActionParams(
        uri=uri,
        range=Range(start, end),
        diagnostics=diagnostics_at_line(diagnostics, start.line),
    )
