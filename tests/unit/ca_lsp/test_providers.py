"""Tests for provider capabilities, registry and the in-memory provider."""

import asyncio

import pytest

from ca_common.errors import ProviderError, ResolveError
from ca_lsp.params import Position, cursor_params
from ca_lsp.providers import (
    REQUEST_FAILED,
    ProviderCapabilities,
    ProviderRegistry,
    StaticProvider,
)


pytestmark = pytest.mark.unit_lsp

URI = "file:///main.rs"


@pytest.mark.parametrize(
    ("server", "expected"),
    [
        ({"codeActionProvider": True}, ProviderCapabilities(True, False)),
        ({"codeActionProvider": {"resolveProvider": True}}, ProviderCapabilities(True, True)),
        (
            {"codeActionProvider": {"codeActionKinds": ["quickfix"]}},
            ProviderCapabilities(True, False),
        ),
        ({}, ProviderCapabilities(False, False)),
    ],
)
def test_capabilities_from_server(server, expected) -> None:
    assert ProviderCapabilities.from_server_capabilities(server) == expected


def test_registry_attach_order_and_unregister() -> None:
    a, b = StaticProvider("a"), StaticProvider("b")
    registry = ProviderRegistry([a, b])
    registry.attach(URI, b.id)
    registry.attach(URI, a.id)
    registry.attach(URI, b.id)
    assert registry.attached(URI) == [b, a]
    assert registry.attached("file:///other.rs") == []

    registry.unregister(b.id)
    assert registry.attached(URI) == [a]
    assert registry.get(b.id) is None


def test_registry_rejects_unknown_provider() -> None:
    with pytest.raises(KeyError):
        ProviderRegistry().attach(URI, 999)


def test_static_provider_returns_copies_and_records_requests() -> None:
    provider = StaticProvider("clippy", [{"title": "Fix", "edit": {"changes": {}}}])
    params = cursor_params(URI, Position(0, 0))

    first = asyncio.run(provider.code_actions(params))
    first[0]["title"] = "mutated"
    second = asyncio.run(provider.code_actions(params))

    assert second[0]["title"] == "Fix"
    assert [method for method, _ in provider.requests] == ["textDocument/codeAction"] * 2


def test_static_provider_failure() -> None:
    provider = StaticProvider("broken", failure="server crashed")
    with pytest.raises(ProviderError, match="server crashed"):
        asyncio.run(provider.code_actions(cursor_params(URI, Position(0, 0))))


def test_static_provider_resolve() -> None:
    provider = StaticProvider(
        "ra",
        resolutions={"Add import": {"edit": {"changes": {URI: []}}}},
        resolve_errors={"Broken": (-32602, "invalid params")},
    )
    assert provider.capabilities.resolve is True

    resolved = asyncio.run(provider.resolve({"title": "Add import", "data": 1}))
    assert resolved == {"title": "Add import", "data": 1, "edit": {"changes": {URI: []}}}

    with pytest.raises(ResolveError) as excinfo:
        asyncio.run(provider.resolve({"title": "Broken"}))
    assert (excinfo.value.code, excinfo.value.message) == (-32602, "invalid params")

    with pytest.raises(ResolveError) as excinfo:
        asyncio.run(provider.resolve({"title": "Unknown"}))
    assert excinfo.value.code == REQUEST_FAILED
