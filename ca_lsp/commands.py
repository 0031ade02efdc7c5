"""Command dispatch table for action side effects."""

from __future__ import annotations

from typing import Callable, Iterator, TypeAlias

from ca_lsp.models import Command, RequestContext

CommandHandler: TypeAlias = Callable[[Command, RequestContext], None]


class CommandRegistry:
    """Maps command names to handlers; unknown names simply have no handler."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler | None = None):
        if handler is not None:
            self._handlers[name] = handler
            return handler

        def decorator(func: CommandHandler) -> CommandHandler:
            self._handlers[name] = func
            return func

        return decorator

    def unregister(self, name: str) -> None:
        self._handlers.pop(name, None)

    def get(self, name: str) -> CommandHandler | None:
        return self._handlers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)
