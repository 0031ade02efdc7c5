"""Provider protocol, registry and an in-memory provider."""

from __future__ import annotations

import asyncio
import copy
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Protocol, Sequence

from ca_common.errors import ProviderError, ResolveError
from ca_lsp.params import CodeActionParams

logger = logging.getLogger(__name__)

# JSON-RPC "RequestFailed", used when a provider cannot resolve an action.
REQUEST_FAILED = -32803

_provider_ids = itertools.count(1)


@dataclass(frozen=True)
class ProviderCapabilities:
    code_action: bool = True
    resolve: bool = False

    @classmethod
    def from_server_capabilities(cls, capabilities: Mapping[str, Any]) -> "ProviderCapabilities":
        """Interpret LSP ``codeActionProvider`` (``true`` or an options table)."""
        provider = capabilities.get("codeActionProvider")
        if isinstance(provider, Mapping):
            return cls(code_action=True, resolve=bool(provider.get("resolveProvider")))
        return cls(code_action=bool(provider), resolve=False)


class Provider(Protocol):
    id: int
    name: str
    offset_encoding: str | None
    capabilities: ProviderCapabilities

    async def code_actions(
        self, params: CodeActionParams
    ) -> Sequence[Mapping[str, Any]] | None: ...

    async def resolve(self, action: Mapping[str, Any]) -> Mapping[str, Any]: ...


class ProviderRegistry:
    """Tracks known providers and which documents they are attached to."""

    def __init__(self, providers: Iterable[Provider] = ()) -> None:
        self._providers: dict[int, Provider] = {}
        self._attached: dict[str, list[int]] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: Provider) -> None:
        self._providers[provider.id] = provider

    def unregister(self, provider_id: int) -> None:
        self._providers.pop(provider_id, None)
        for ids in self._attached.values():
            if provider_id in ids:
                ids.remove(provider_id)

    def attach(self, uri: str, provider_id: int) -> None:
        if provider_id not in self._providers:
            raise KeyError(f"Unknown provider id: {provider_id}")
        ids = self._attached.setdefault(uri, [])
        if provider_id not in ids:
            ids.append(provider_id)

    def attached(self, uri: str) -> list[Provider]:
        ids = self._attached.get(uri, [])
        return [self._providers[pid] for pid in ids if pid in self._providers]

    def get(self, provider_id: int) -> Provider | None:
        return self._providers.get(provider_id)


class StaticProvider:
    """Provider answering from in-memory data.

    ``resolutions`` maps an action title to the fields a resolve round-trip
    fills in; ``resolve_errors`` maps a title to ``(code, message)``.
    ``failure`` makes every code action query raise, and ``delay`` (seconds)
    postpones every answer.
    """

    def __init__(
        self,
        name: str,
        actions: Sequence[Mapping[str, Any]] = (),
        *,
        offset_encoding: str | None = "utf-16",
        capabilities: ProviderCapabilities | None = None,
        resolutions: Mapping[str, Mapping[str, Any]] | None = None,
        resolve_errors: Mapping[str, tuple[int, str]] | None = None,
        failure: str | None = None,
        delay: float = 0.0,
    ) -> None:
        self.id = next(_provider_ids)
        self.name = name
        self.offset_encoding = offset_encoding
        self.capabilities = capabilities or ProviderCapabilities(
            code_action=True, resolve=bool(resolutions or resolve_errors)
        )
        self._actions = [dict(a) for a in actions]
        self._resolutions = dict(resolutions or {})
        self._resolve_errors = dict(resolve_errors or {})
        self._failure = failure
        self._delay = delay
        self.requests: list[tuple[str, Any]] = []

    async def code_actions(self, params: CodeActionParams) -> list[dict[str, Any]]:
        self.requests.append(("textDocument/codeAction", params.to_payload()))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._failure:
            raise ProviderError(self._failure, context={"provider": self.name})
        return copy.deepcopy(self._actions)

    async def resolve(self, action: Mapping[str, Any]) -> dict[str, Any]:
        self.requests.append(("codeAction/resolve", dict(action)))
        if self._delay:
            await asyncio.sleep(self._delay)
        title = str(action.get("title") or "")
        if title in self._resolve_errors:
            code, message = self._resolve_errors[title]
            raise ResolveError(code, message, context={"provider": self.name, "title": title})
        if title not in self._resolutions:
            raise ResolveError(
                REQUEST_FAILED,
                f"no resolution for '{title}'",
                context={"provider": self.name},
            )
        resolved = dict(action)
        resolved.update(copy.deepcopy(dict(self._resolutions[title])))
        logger.debug("Resolved code action %r via %s", title, self.name)
        return resolved

    def __repr__(self) -> str:
        return f"StaticProvider(id={self.id}, name={self.name!r})"
