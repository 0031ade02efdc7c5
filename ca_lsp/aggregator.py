"""Fan a code action query out to every attached provider and merge the answers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from ca_common.errors import CAError, ProviderError, error_to_payload, wrap_error
from ca_lsp.models import CodeActionItem, RequestContext, parse_action
from ca_lsp.params import CODE_ACTION_METHOD, CodeActionParams
from ca_lsp.protocols import Notifier
from ca_lsp.providers import Provider, ProviderRegistry

logger = logging.getLogger(__name__)

NO_ACTIONS_MESSAGE = "No code actions available"


@dataclass
class AggregationResult:
    items: list[CodeActionItem] = field(default_factory=list)
    failures: list[ProviderError] = field(default_factory=list)


class ResultAggregator:
    """Collects actions from all capable providers of a document.

    Every branch runs concurrently and the merge only happens once all of them
    have answered; results keep the providers' attach order.
    """

    def __init__(self, registry: ProviderRegistry, notifier: Notifier) -> None:
        self._registry = registry
        self._notifier = notifier

    def providers_for(self, params: CodeActionParams) -> list[Provider]:
        return [p for p in self._registry.attached(params.uri) if p.capabilities.code_action]

    async def collect(self, params: CodeActionParams) -> AggregationResult:
        providers = self.providers_for(params)
        logger.debug("Querying %d provider(s) for %s", len(providers), params.uri)
        answers = await asyncio.gather(
            *(provider.code_actions(params) for provider in providers),
            return_exceptions=True,
        )

        result = AggregationResult()
        for provider, answer in zip(providers, answers):
            if isinstance(answer, asyncio.CancelledError):
                raise answer
            if isinstance(answer, BaseException):
                result.failures.append(self._as_provider_error(provider, answer))
                continue
            ctx = RequestContext(provider_id=provider.id, method=CODE_ACTION_METHOD, params=params)
            for payload in answer or ():
                result.items.append(CodeActionItem(action=parse_action(payload), ctx=ctx))
            logger.debug("%s returned %d action(s)", provider.name, len(answer or ()))
        return result

    async def request(self, params: CodeActionParams) -> list[CodeActionItem]:
        """Return every proposed action; warn per failed provider, notify when empty."""
        result = await self.collect(params)
        for failure in result.failures:
            logger.warning("Code action request failed", extra={"error": error_to_payload(failure)})
            self._notifier.warning(str(failure))
        if not result.items:
            self._notifier.info(NO_ACTIONS_MESSAGE)
        return result.items

    @staticmethod
    def _as_provider_error(provider: Provider, exc: BaseException) -> ProviderError:
        context = {"provider": provider.name, "provider_id": provider.id}
        if isinstance(exc, CAError):
            context.update(exc.context)
        return wrap_error(
            ProviderError,
            f"{provider.name}: code action request failed: {exc}",
            context=context,
            cause=exc if isinstance(exc, Exception) else None,
        )
