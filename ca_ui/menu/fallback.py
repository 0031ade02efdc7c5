"""Single-level chooser used when no action carries a group."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from ca_lsp.models import CodeActionItem, CommandAction
from ca_ui.tui.core.protocols import Picker
from ca_ui.tui.system.models import PickItem

logger = logging.getLogger(__name__)

PROMPT = "Code actions:"


def format_fallback_title(title: str) -> str:
    """Escape line breaks into visible two-character sequences."""
    return title.replace("\r\n", "\\r\\n").replace("\n", "\\n").replace("\r", "\\r")


def _describe(item: CodeActionItem) -> str:
    action = item.action
    if isinstance(action, CommandAction):
        return f"command: {action.command}"
    return action.kind or ""


def to_pick_items(items: Sequence[CodeActionItem]) -> list[PickItem]:
    picks = []
    for number, item in enumerate(items, start=1):
        title = format_fallback_title(item.action.title)
        picks.append(
            PickItem(
                id=str(number),
                title=title,
                description=_describe(item),
                search_blob=title,
                payload=item,
            )
        )
    return picks


class FallbackPresenter:
    def __init__(
        self,
        picker: Picker,
        on_choice: Callable[[CodeActionItem | None], None],
    ) -> None:
        self._picker = picker
        self._on_choice = on_choice

    async def present(self, items: Sequence[CodeActionItem]) -> CodeActionItem | None:
        picked = await self._picker.pick_one(to_pick_items(items), title=PROMPT)
        choice = picked.payload if picked is not None else None
        logger.debug("Fallback chooser returned %r", choice.action.title if choice else None)
        self._on_choice(choice)
        return choice
