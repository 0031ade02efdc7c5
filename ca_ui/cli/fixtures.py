"""YAML fixtures describing a document, its diagnostics and its providers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ca_lsp.providers import ProviderCapabilities, ProviderRegistry, StaticProvider
from ca_ui.flows.errors import UIFlowError


class FixtureDocument(BaseModel):
    uri: str = Field(min_length=1)
    text: str = ""

    model_config = {"extra": "ignore"}

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


class FixtureResolveError(BaseModel):
    code: int = -32803
    message: str


class FixtureProvider(BaseModel):
    name: str = Field(min_length=1)
    offset_encoding: str | None = "utf-16"
    code_action: bool = True
    resolve: bool | None = None
    actions: list[dict[str, Any]] = Field(default_factory=list)
    resolutions: dict[str, dict[str, Any]] = Field(default_factory=dict)
    resolve_errors: dict[str, FixtureResolveError] = Field(default_factory=dict)
    failure: str | None = None
    delay: float = Field(default=0.0, ge=0)

    model_config = {"extra": "ignore"}

    @field_validator("actions")
    @classmethod
    def _require_titles(cls, value: list[dict[str, Any]]) -> list[dict[str, Any]]:
        for action in value:
            if not isinstance(action.get("title"), str):
                raise ValueError("every action needs a string title")
        return value

    def build(self) -> StaticProvider:
        resolve = self.resolve
        if resolve is None:
            resolve = bool(self.resolutions or self.resolve_errors)
        return StaticProvider(
            self.name,
            self.actions,
            offset_encoding=self.offset_encoding,
            capabilities=ProviderCapabilities(code_action=self.code_action, resolve=resolve),
            resolutions=self.resolutions,
            resolve_errors={
                title: (err.code, err.message) for title, err in self.resolve_errors.items()
            },
            failure=self.failure,
            delay=self.delay,
        )


class CodeActionFixture(BaseModel):
    """Everything ``codeactions pick``/``list`` need to run without a server."""

    document: FixtureDocument
    diagnostics: list[dict[str, Any]] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)
    providers: list[FixtureProvider] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    def build_registry(self) -> ProviderRegistry:
        registry = ProviderRegistry()
        for entry in self.providers:
            provider = entry.build()
            registry.register(provider)
            registry.attach(self.document.uri, provider.id)
        return registry


def load_fixture(path: Path) -> CodeActionFixture:
    if not path.exists():
        raise UIFlowError(f"Fixture not found: {path}")
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise UIFlowError(f"Fixture is not valid YAML: {exc}") from exc
    try:
        return CodeActionFixture.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise UIFlowError(f"Invalid fixture {path}: {where}: {first['msg']}") from exc
