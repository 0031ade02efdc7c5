"""End-to-end grouped code action flow: fan-out, partition, present, apply."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from ca_common.errors import SessionBusyError
from ca_common.logging import request_log_context
from ca_lsp.aggregator import ResultAggregator
from ca_lsp.commands import CommandRegistry
from ca_lsp.models import CodeActionItem
from ca_lsp.params import CodeActionParams
from ca_lsp.protocols import EditApplier
from ca_lsp.providers import ProviderRegistry
from ca_lsp.resolver import SelectionResolver
from ca_ui.config import CodeActionsConfig
from ca_ui.menu.fallback import FallbackPresenter
from ca_ui.menu.machine import GroupedActionMenu
from ca_ui.menu.partition import partition_actions
from ca_ui.menu.state import MenuSession
from ca_ui.tui.core.protocols import UI

logger = logging.getLogger(__name__)


class CodeActionGroupFlow:
    """Runs one selection flow at a time on top of a UI facade.

    Every ``request`` starts a new generation; results of an older generation
    (superseded or ``abandon``-ed) are dropped without opening anything. A
    request made while a menu session or the fallback chooser is live
    raises ``SessionBusyError``.
    """

    def __init__(
        self,
        ui: UI,
        registry: ProviderRegistry,
        config: CodeActionsConfig | None = None,
        commands: CommandRegistry | None = None,
        edits: EditApplier | None = None,
    ) -> None:
        self.ui = ui
        self.config = config or CodeActionsConfig()
        self.commands = commands or CommandRegistry()
        self.aggregator = ResultAggregator(registry, ui.present)
        self.resolver = SelectionResolver(registry, self.commands, edits or _NoEdits(), ui.present)
        self.applied: list[CodeActionItem] = []
        self._session: MenuSession | None = None
        self._generation = 0
        self._fallback_active = False
        self._tasks: set[asyncio.Task] = set()

    @property
    def session(self) -> MenuSession | None:
        return self._session

    @property
    def busy(self) -> bool:
        if self._fallback_active:
            return True
        return self._session is not None and not self._session.closed

    def abandon(self) -> None:
        """Make any in-flight aggregation stale."""
        self._generation += 1

    async def request(self, params: CodeActionParams) -> MenuSession | None:
        if self.busy:
            raise SessionBusyError(
                "A code action menu is already open", context={"uri": params.uri}
            )
        if not self.aggregator.providers_for(params):
            logger.debug("No code action providers attached to %s", params.uri)
            return None

        self._generation += 1
        generation = self._generation
        with request_log_context(uri=params.uri, generation=generation):
            items = await self.aggregator.request(params)
        if generation != self._generation:
            logger.debug("Dropping stale code action results (generation %d)", generation)
            return None
        if not items:
            return None
        if self.busy:
            raise SessionBusyError(
                "A code action menu is already open", context={"uri": params.uri}
            )

        actions = partition_actions(items)
        if not actions.has_groups and self.config.ui_select_fallback:
            self._fallback_active = True
            try:
                await FallbackPresenter(self.ui.picker, self.select).present(list(actions))
            finally:
                self._fallback_active = False
            return None

        session = MenuSession(actions=actions)
        GroupedActionMenu(self.ui.surfaces, self.config, session, self.select).open()
        self._session = session
        return session

    def select(self, item: CodeActionItem | None) -> None:
        """Resolve and apply ``item`` in a tracked background task."""
        task = asyncio.get_running_loop().create_task(self._choose(item))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _choose(self, item: CodeActionItem | None) -> bool:
        try:
            applied = await self.resolver.choose(item)
        except Exception as exc:
            logger.exception("Applying code action failed")
            self.ui.present.error(f"Code action failed: {exc}")
            return False
        if applied and item is not None:
            self.applied.append(item)
        return applied

    async def drain(self) -> None:
        """Wait for every pending selection to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


class _NoEdits:
    def apply(self, edit: Mapping[str, Any], offset_encoding: str) -> None:
        logger.debug("Discarding workspace edit (%s); no edit applier configured", offset_encoding)
