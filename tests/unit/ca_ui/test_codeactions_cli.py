"""CLI behavior tests using Typer's CliRunner."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ca_ui.cli.main import app, ctx_store


pytestmark = pytest.mark.unit_ui

FIXTURE = Path(__file__).parents[3] / "fixtures" / "rust_clippy.yaml"

runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_context(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CA_LOG_LEVEL",
        "CA_LOG_JSON",
        "CA_LOG_FILE",
        "CA_GROUP_ICON",
        "CA_BORDER",
        "CA_UI_SELECT_FALLBACK",
        "CA_CONFIRM_KEYS",
        "CA_QUIT_KEYS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(ctx_store, "_ui", None)
    monkeypatch.setattr(ctx_store, "_config", None)
    monkeypatch.setattr(ctx_store, "config_path", None)
    monkeypatch.setattr(ctx_store, "headless", False)
    monkeypatch.setattr(ctx_store, "menu_path", [])


def _invoke(tmp_path: Path, *args: str):
    return runner.invoke(app, ["--headless", "--log-file", str(tmp_path / "ca.log"), *args])


def test_pick_drills_into_group_and_applies_resolved_edit(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path, "pick", str(FIXTURE), "--line", "2", "--col", "9", "-p", "Clippy", "-p", "Fix B"
    )

    assert result.exit_code == 0, result.output
    assert "Workspace edit (utf-8)" in result.output
    assert '"doubled"' in result.output
    assert "SUCCESS: Applied: Fix B rename the binding" in result.output


def test_pick_ungrouped_action_dispatches_command(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "pick", str(FIXTURE), "-p", "Add import")

    assert result.exit_code == 0, result.output
    assert "Ran rust-analyzer.applySourceChange" in result.output
    assert "SUCCESS: Applied: Add import" in result.output


def test_pick_bare_command_is_resolved_before_dispatch(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "pick", str(FIXTURE), "-p", "Run main")

    assert result.exit_code == 0, result.output
    assert 'Ran rust-analyzer.runSingle [{"label": "main", "kind": "cargo"}]' in result.output
    assert "SUCCESS: Applied: Run main" in result.output


def test_pick_without_path_quits_quietly(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "pick", str(FIXTURE))

    assert result.exit_code == 0, result.output
    assert "Applied" not in result.output


def test_missing_fixture_exits_with_flow_error(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "pick", str(tmp_path / "missing.yaml"))

    assert result.exit_code == 2
    assert "Fixture not found" in result.output


def test_bad_range_is_rejected(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "pick", str(FIXTURE), "--range", "0:1-2:3")

    assert result.exit_code == 2
    assert "Invalid range" in result.output


def test_invalid_config_exits_with_one(tmp_path: Path) -> None:
    config = tmp_path / "codeactions.yaml"
    config.write_text("code_actions:\n  border: thick\n")

    result = runner.invoke(
        app,
        [
            "--headless",
            "--log-file",
            str(tmp_path / "ca.log"),
            "--config",
            str(config),
            "pick",
            str(FIXTURE),
        ],
    )

    assert result.exit_code == 1
    assert "Invalid code action configuration" in result.output


def test_list_prints_numbered_table(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "list", str(FIXTURE))

    assert result.exit_code == 0, result.output
    assert "Code Actions" in result.output
    assert "Clippy" in result.output
    assert "1.2 | Fix B rename the binding | clippy" in result.output
    assert "2 | Add import | rust-analyzer" in result.output
