"""Data shapes for proposed code actions and the context they came from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, TypeAlias, TYPE_CHECKING

if TYPE_CHECKING:
    from ca_lsp.params import CodeActionParams


@dataclass(frozen=True)
class Command:
    """Structured command reference: ``{title, command, arguments}``."""

    command: str
    title: str = ""
    arguments: tuple[Any, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Command":
        return cls(
            command=str(payload["command"]),
            title=str(payload.get("title") or ""),
            arguments=tuple(payload.get("arguments") or ()),
        )

    @classmethod
    def from_action(cls, action: "CommandAction") -> "Command":
        return cls(command=action.command, title=action.title, arguments=action.arguments)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "command": self.command}
        if self.arguments:
            payload["arguments"] = list(self.arguments)
        return payload


@dataclass
class EditAction:
    """A code action carrying an edit and/or a structured command.

    ``edit`` may be absent until the action is resolved. ``idx`` is the
    1-based row of the action in whichever surface currently renders it.
    """

    title: str
    kind: str | None = None
    group: str | None = None
    edit: Mapping[str, Any] | None = None
    command: Command | None = None
    data: Any = None
    idx: int | None = field(default=None, compare=False)


@dataclass
class CommandAction:
    """A bare command offered as an action."""

    title: str
    command: str
    group: str | None = None
    arguments: tuple[Any, ...] = ()
    idx: int | None = field(default=None, compare=False)


Action: TypeAlias = EditAction | CommandAction


def parse_action(payload: Mapping[str, Any]) -> Action:
    """Build the matching action variant from a raw provider payload.

    A string ``command`` marks a bare command; everything else is a code
    action whose optional ``command`` is a structured reference. A resolved
    command that came back with an edit keeps both.
    """
    title = str(payload.get("title") or "")
    group = payload.get("group") or None
    command = payload.get("command")
    if isinstance(command, str) and payload.get("edit") is not None:
        return EditAction(
            title=title,
            group=group,
            edit=payload["edit"],
            command=Command(
                command=command,
                title=title,
                arguments=tuple(payload.get("arguments") or ()),
            ),
        )
    if isinstance(command, str):
        return CommandAction(
            title=title,
            command=command,
            group=group,
            arguments=tuple(payload.get("arguments") or ()),
        )
    return EditAction(
        title=title,
        kind=payload.get("kind"),
        group=group,
        edit=payload.get("edit"),
        command=Command.from_payload(command) if isinstance(command, Mapping) else None,
        data=payload.get("data"),
    )


def action_to_payload(action: Action) -> dict[str, Any]:
    """Serialize an action back to its wire shape (``idx`` is never sent)."""
    if isinstance(action, CommandAction):
        payload: dict[str, Any] = {"title": action.title, "command": action.command}
        if action.arguments:
            payload["arguments"] = list(action.arguments)
    else:
        payload = {"title": action.title}
        if action.kind is not None:
            payload["kind"] = action.kind
        if action.edit is not None:
            payload["edit"] = action.edit
        if action.command is not None:
            payload["command"] = action.command.to_payload()
        if action.data is not None:
            payload["data"] = action.data
    if action.group:
        payload["group"] = action.group
    return payload


@dataclass(frozen=True)
class RequestContext:
    """Request under which an action was produced."""

    provider_id: int
    method: str
    params: "CodeActionParams"


@dataclass
class CodeActionItem:
    """One action paired with its originating request context.

    ``label`` is the single-line display title; it is filled in by the
    partitioner and never replaces ``action.title``.
    """

    action: Action
    ctx: RequestContext
    label: str = ""

    @property
    def title(self) -> str:
        return self.label or self.action.title
