"""`pick` and `list` commands running code action flows on a fixture."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import List, Optional

import typer

from ca_common.errors import ConfigurationError, SessionBusyError
from ca_lsp.aggregator import ResultAggregator
from ca_lsp.commands import CommandRegistry
from ca_lsp.models import CodeActionItem
from ca_lsp.params import CodeActionParams, Position, cursor_params, selection_params
from ca_ui.cli.fixtures import CodeActionFixture, load_fixture
from ca_ui.flows.code_actions import CodeActionGroupFlow
from ca_ui.flows.errors import UIFlowError
from ca_ui.menu.partition import partition_actions
from ca_ui.presenters.actions import build_action_table
from ca_ui.presenters.edits import PreviewEditApplier, command_presenter
from ca_ui.tui.core import capabilities
from ca_ui.tui.core.protocols import UI
from ca_ui.tui.system.headless import HeadlessUI
from ca_ui.wiring.dependencies import UIContext

_RANGE_RE = re.compile(r"^(\d+):(\d+)-(\d+):(\d+)$")


def parse_range(value: str) -> tuple[Position, Position]:
    """Parse ``L:C-L:C`` (1-based, inclusive of start) into zero-based positions."""
    match = _RANGE_RE.match(value.strip())
    if match is None:
        raise UIFlowError(f"Invalid range {value!r}; expected L:C-L:C")
    l1, c1, l2, c2 = (int(part) for part in match.groups())
    if min(l1, c1, l2, c2) < 1:
        raise UIFlowError(f"Invalid range {value!r}; lines and columns start at 1")
    return Position(l1 - 1, c1 - 1), Position(l2 - 1, c2 - 1)


def build_params(
    fixture: CodeActionFixture,
    line: int,
    col: int,
    selection: Optional[str],
) -> tuple[CodeActionParams, tuple[int, int]]:
    """Return request params and the zero-based editor cursor."""
    uri = fixture.document.uri
    if selection:
        start, end = parse_range(selection)
        params = selection_params(uri, start, end, fixture.diagnostics)
        return params, (params.range.start.line, params.range.start.character)
    position = Position(line - 1, col - 1)
    return cursor_params(uri, position, fixture.diagnostics), (position.line, position.character)


def echo_recorded(ui: UI) -> None:
    """Print what a headless UI recorded, for CI logs."""
    if not isinstance(ui, HeadlessUI):
        return
    for recorded in ui.recorded_tables:
        typer.echo(recorded.model.title)
        for row in recorded.model.rows:
            typer.echo("  " + " | ".join(row))
    for message in ui.recorded_messages:
        typer.echo(message)


async def _run_pick(
    flow: CodeActionGroupFlow, ui: UI, params: CodeActionParams
) -> list[CodeActionItem]:
    session = await flow.request(params)
    if session is not None:
        await ui.surfaces.run()
    await flow.drain()
    return flow.applied


def register_action_commands(app: typer.Typer, ctx: UIContext) -> None:
    """Register `pick` and `list` on the root app."""

    @app.command("pick")
    def pick(
        fixture: Path = typer.Argument(..., help="YAML fixture with document and providers."),
        line: int = typer.Option(1, "--line", "-l", min=1, help="Cursor line (1-based)."),
        col: int = typer.Option(1, "--col", min=1, help="Cursor column (1-based)."),
        selection: Optional[str] = typer.Option(
            None, "--range", "-r", help="Visual range as L:C-L:C (1-based)."
        ),
        path: Optional[List[str]] = typer.Option(
            None,
            "--path",
            "-p",
            help="Row labels to confirm in order (headless only), e.g. -p Clippy -p 'Fix B'.",
        ),
    ) -> None:
        """Open the grouped code action menu and apply the chosen action."""
        try:
            data = load_fixture(fixture)
            params, cursor = build_params(data, line, col, selection)
            if not ctx.headless and not capabilities.is_tty_available():
                raise UIFlowError("The interactive menu requires a TTY; use --headless.")
            config = ctx.config
        except UIFlowError as exc:
            ctx.ui.present.error(str(exc))
            echo_recorded(ctx.ui)
            raise typer.Exit(exc.exit_code)
        except ConfigurationError as exc:
            ctx.ui.present.error(str(exc))
            echo_recorded(ctx.ui)
            raise typer.Exit(1)

        ui = ctx.document_ui(data.document.lines, cursor, path or [])
        commands = CommandRegistry()
        handler = command_presenter(ui.present)
        for name in data.commands:
            commands.register(name, handler)
        flow = CodeActionGroupFlow(
            ui,
            data.build_registry(),
            config,
            commands,
            PreviewEditApplier(ui.tables, ui.present),
        )
        try:
            applied = asyncio.run(_run_pick(flow, ui, params))
        except SessionBusyError as exc:
            ui.present.error(str(exc))
            echo_recorded(ui)
            raise typer.Exit(1)

        for item in applied:
            ui.present.success(f"Applied: {item.title}")
        echo_recorded(ui)

    @app.command("list")
    def list_actions(
        fixture: Path = typer.Argument(..., help="YAML fixture with document and providers."),
        line: int = typer.Option(1, "--line", "-l", min=1, help="Cursor line (1-based)."),
        col: int = typer.Option(1, "--col", min=1, help="Cursor column (1-based)."),
        selection: Optional[str] = typer.Option(
            None, "--range", "-r", help="Visual range as L:C-L:C (1-based)."
        ),
    ) -> None:
        """Print the partitioned code actions without opening the menu."""
        try:
            data = load_fixture(fixture)
            params, _ = build_params(data, line, col, selection)
            config = ctx.config
        except UIFlowError as exc:
            ctx.ui.present.error(str(exc))
            echo_recorded(ctx.ui)
            raise typer.Exit(exc.exit_code)
        except ConfigurationError as exc:
            ctx.ui.present.error(str(exc))
            echo_recorded(ctx.ui)
            raise typer.Exit(1)

        registry = data.build_registry()
        items = asyncio.run(ResultAggregator(registry, ctx.ui.present).request(params))
        if items:
            table = build_action_table(partition_actions(items), registry, config.group_icon)
            ctx.ui.tables.show(table)
        echo_recorded(ctx.ui)
