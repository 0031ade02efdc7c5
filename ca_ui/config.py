"""Menu configuration: key sets, group icon, fallback toggle and border."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ca_common.config import parse_bool_env, parse_list_env
from ca_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_SECTION = "code_actions"


def _as_key_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    return value


class CodeActionKeys(BaseModel):
    """Key identifiers (prompt_toolkit names) bound on both surfaces."""

    confirm: list[str] = Field(default_factory=lambda: ["enter"], min_length=1)
    quit: list[str] = Field(default_factory=lambda: ["q", "escape"], min_length=1)

    model_config = {"extra": "ignore"}

    @field_validator("confirm", "quit", mode="before")
    @classmethod
    def _wrap_single_key(cls, value: Any) -> Any:
        return _as_key_list(value)

    @field_validator("confirm", "quit")
    @classmethod
    def _reject_blank_keys(cls, value: list[str]) -> list[str]:
        keys = [key.strip() for key in value]
        if any(not key for key in keys):
            raise ValueError("key identifiers must be non-empty")
        return keys


class CodeActionsConfig(BaseModel):
    keys: CodeActionKeys = Field(default_factory=CodeActionKeys)
    group_icon: str = Field(default=" ▶", description="Glyph appended to group rows")
    ui_select_fallback: bool = Field(
        default=False, description="Use the flat chooser when nothing is grouped"
    )
    border: Literal["rounded", "single", "none"] = "rounded"

    model_config = {"extra": "ignore"}


def _read_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Cannot read configuration: {exc}", context={"path": str(path)}, cause=exc
        ) from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError("Configuration must be a mapping", context={"path": str(path)})
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, Mapping):
        raise ConfigurationError(
            f"'{CONFIG_SECTION}' must be a mapping", context={"path": str(path)}
        )
    return dict(section)


def _apply_env(data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    fallback = parse_bool_env(env.get("CA_UI_SELECT_FALLBACK"))
    if fallback is not None:
        data["ui_select_fallback"] = fallback
    if "CA_GROUP_ICON" in env:
        data["group_icon"] = env["CA_GROUP_ICON"]
    if env.get("CA_BORDER"):
        data["border"] = env["CA_BORDER"].strip()

    confirm = parse_list_env(env.get("CA_CONFIRM_KEYS"))
    quit_keys = parse_list_env(env.get("CA_QUIT_KEYS"))
    if confirm or quit_keys:
        keys = data.get("keys")
        keys = dict(keys) if isinstance(keys, Mapping) else {}
        if confirm:
            keys["confirm"] = confirm
        if quit_keys:
            keys["quit"] = quit_keys
        data["keys"] = keys
    return data


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CodeActionsConfig:
    """Load configuration from an optional YAML file plus environment overrides."""
    data = _read_file(path) if path is not None else {}
    data = _apply_env(data, os.environ if env is None else env)
    try:
        config = CodeActionsConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid code action configuration: {exc.errors()[0]['msg']}",
            context={"path": str(path) if path else None},
            cause=exc,
        ) from exc
    logger.debug("Loaded code action configuration: %s", config.model_dump())
    return config
