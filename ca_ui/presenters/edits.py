"""Presenters for applied workspace edits and dispatched commands."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ca_lsp.models import Command, RequestContext
from ca_ui.tui.core.protocols import Presenter, TablePresenter
from ca_ui.tui.system.models import TableModel


def _range_label(edit_range: Mapping[str, Any]) -> str:
    start = edit_range.get("start", {})
    end = edit_range.get("end", {})
    return (
        f"{start.get('line', 0) + 1}:{start.get('character', 0) + 1}"
        f"-{end.get('line', 0) + 1}:{end.get('character', 0) + 1}"
    )


def _text_edit_rows(uri: str, edits: Any) -> list[list[str]]:
    return [
        [uri, _range_label(edit.get("range", {})), json.dumps(edit.get("newText", ""))]
        for edit in edits or ()
    ]


def build_edit_table(edit: Mapping[str, Any], offset_encoding: str) -> TableModel:
    """Summarize a workspace edit (``changes`` and ``documentChanges``)."""
    rows: list[list[str]] = []
    for uri, edits in (edit.get("changes") or {}).items():
        rows.extend(_text_edit_rows(uri, edits))
    for change in edit.get("documentChanges") or ():
        kind = change.get("kind")
        if kind == "rename":
            rows.append([change.get("oldUri", ""), "rename", change.get("newUri", "")])
        elif kind in ("create", "delete"):
            rows.append([change.get("uri", ""), kind, ""])
        else:
            uri = change.get("textDocument", {}).get("uri", "")
            rows.extend(_text_edit_rows(uri, change.get("edits")))
    return TableModel(
        title=f"Workspace edit ({offset_encoding})",
        columns=["Document", "Range", "New text"],
        rows=rows,
    )


class PreviewEditApplier:
    """Edit applier that shows each workspace edit instead of writing files."""

    def __init__(self, tables: TablePresenter, presenter: Presenter) -> None:
        self._tables = tables
        self._presenter = presenter
        self.applied: list[tuple[Mapping[str, Any], str]] = []

    def apply(self, edit: Mapping[str, Any], offset_encoding: str) -> None:
        self.applied.append((edit, offset_encoding))
        table = build_edit_table(edit, offset_encoding)
        if not table.rows:
            self._presenter.info("Workspace edit is empty")
            return
        self._tables.show(table)


def command_presenter(presenter: Presenter):
    """Build a command handler that reports the dispatched command."""

    def handler(command: Command, ctx: RequestContext) -> None:
        args = f" {json.dumps(list(command.arguments))}" if command.arguments else ""
        presenter.success(f"Ran {command.command}{args} for {ctx.params.uri}")

    return handler
