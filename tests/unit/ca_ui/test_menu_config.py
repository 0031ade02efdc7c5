"""Tests for menu configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from ca_common.errors import ConfigurationError
from ca_ui.config import CodeActionKeys, CodeActionsConfig, load_config


pytestmark = pytest.mark.unit_ui


def test_defaults() -> None:
    config = load_config(env={})
    assert config == CodeActionsConfig()
    assert config.keys.confirm == ["enter"]
    assert config.keys.quit == ["q", "escape"]
    assert config.group_icon == " ▶"
    assert config.ui_select_fallback is False
    assert config.border == "rounded"


def test_single_key_is_wrapped() -> None:
    keys = CodeActionKeys(confirm="l", quit=["h", "escape"])
    assert keys.confirm == ["l"]
    assert keys.quit == ["h", "escape"]


def test_blank_or_empty_keys_are_rejected() -> None:
    with pytest.raises(ValueError):
        CodeActionKeys(confirm=[])
    with pytest.raises(ValueError):
        CodeActionKeys(quit=" ")


def test_yaml_section_and_top_level(tmp_path: Path) -> None:
    sectioned = tmp_path / "sectioned.yaml"
    sectioned.write_text(
        "code_actions:\n"
        "  group_icon: ' >'\n"
        "  ui_select_fallback: true\n"
        "  keys:\n"
        "    confirm: l\n"
    )
    config = load_config(sectioned, env={})
    assert config.group_icon == " >"
    assert config.ui_select_fallback is True
    assert config.keys.confirm == ["l"]
    assert config.keys.quit == ["q", "escape"]

    flat = tmp_path / "flat.yaml"
    flat.write_text("border: none\n")
    assert load_config(flat, env={}).border == "none"


def test_env_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("code_actions:\n  border: single\n  keys:\n    quit: x\n")
    env = {
        "CA_UI_SELECT_FALLBACK": "yes",
        "CA_GROUP_ICON": "",
        "CA_CONFIRM_KEYS": "enter, l",
        "CA_BORDER": "none",
    }

    config = load_config(path, env=env)

    assert config.ui_select_fallback is True
    assert config.group_icon == ""
    assert config.keys.confirm == ["enter", "l"]
    assert config.keys.quit == ["x"]
    assert config.border == "none"


def test_invalid_values_raise_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Invalid code action configuration"):
        load_config(env={"CA_BORDER": "double"})

    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_config(not_mapping, env={})

    missing = tmp_path / "missing.yaml"
    with pytest.raises(ConfigurationError) as excinfo:
        load_config(missing, env={})
    assert excinfo.value.context["path"] == str(missing)
