"""Selection -> optional resolve -> apply pipeline."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ca_common.errors import ResolveError
from ca_lsp.commands import CommandRegistry
from ca_lsp.models import (
    Action,
    CodeActionItem,
    Command,
    EditAction,
    RequestContext,
    action_to_payload,
    parse_action,
)
from ca_lsp.protocols import EditApplier, Notifier
from ca_lsp.providers import Provider, ProviderRegistry

logger = logging.getLogger(__name__)

DEFAULT_OFFSET_ENCODING = "utf-8"


def needs_resolve(action: Action, provider: Provider) -> bool:
    """Any action without a concrete edit is resolved when the provider can.

    Bare commands carry no edit, so they are resolved too.
    """
    if isinstance(action, EditAction) and action.edit is not None:
        return False
    return provider.capabilities.resolve


class SelectionResolver:
    def __init__(
        self,
        registry: ProviderRegistry,
        commands: CommandRegistry,
        edits: EditApplier,
        notifier: Notifier,
    ) -> None:
        self._registry = registry
        self._commands = commands
        self._edits = edits
        self._notifier = notifier

    async def choose(self, item: CodeActionItem | None) -> bool:
        """Resolve (when needed) and apply the chosen action.

        Returns True when the action was applied. A resolve error is reported
        as ``"<code>: <message>"`` and nothing is applied.
        """
        if item is None:
            return False
        provider = self._registry.get(item.ctx.provider_id)
        if provider is None:
            logger.debug("Provider %s is gone; dropping selection", item.ctx.provider_id)
            return False

        action = item.action
        if needs_resolve(action, provider):
            logger.debug("Resolving %r via %s", action.title, provider.name)
            try:
                resolved = await provider.resolve(action_to_payload(action))
            except ResolveError as exc:
                logger.debug("Resolve failed for %r: %s", action.title, exc)
                self._notifier.error(f"{exc.code}: {exc.message}")
                return False
            action = self._merge_resolved(action, resolved)

        self.apply(action, provider, item.ctx)
        return True

    @staticmethod
    def _merge_resolved(original: Action, resolved: Mapping[str, Any]) -> Action:
        merged = parse_action(resolved)
        if not merged.group:
            merged.group = original.group
        merged.idx = original.idx
        return merged

    def apply(self, action: Action, provider: Provider, ctx: RequestContext) -> None:
        """Apply the edit first, then dispatch the command if one is registered."""
        if isinstance(action, EditAction):
            if action.edit is not None:
                self._edits.apply(action.edit, provider.offset_encoding or DEFAULT_OFFSET_ENCODING)
            command = action.command
        else:
            command = Command.from_action(action)

        if command is None:
            return
        handler = self._commands.get(command.command)
        if handler is None:
            logger.debug("No handler registered for command %s", command.command)
            return
        handler(command, ctx)


__all__ = ["SelectionResolver", "needs_resolve"]
