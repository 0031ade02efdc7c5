"""
Command-line interface for grouped code actions.

Runs the two-tier code action menu against YAML fixtures describing a document
and its providers, either interactively or headless (scripted with --path).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ca_ui.cli.commands.actions import register_action_commands
from ca_ui.wiring.dependencies import UIContext, configure_logging

# Initialize global context (lazy)
ctx_store = UIContext()

app = typer.Typer(help="Pick and apply grouped code actions.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Force headless output (useful in CI).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with code action options.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file instead of stderr.",
    ),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    configure_logging(log_file=str(log_file) if log_file else None, force=True)
    ctx_store.headless = headless
    if config is not None:
        ctx_store.config_path = config
        ctx_store.config = None

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_action_commands(app, ctx_store)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
