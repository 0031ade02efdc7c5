"""Public API surface for ca_lsp."""

from ca_lsp.aggregator import NO_ACTIONS_MESSAGE, AggregationResult, ResultAggregator
from ca_lsp.commands import CommandHandler, CommandRegistry
from ca_lsp.models import (
    Action,
    CodeActionItem,
    Command,
    CommandAction,
    EditAction,
    RequestContext,
    action_to_payload,
    parse_action,
)
from ca_lsp.params import (
    CodeActionParams,
    Position,
    Range,
    cursor_params,
    diagnostics_at_line,
    selection_params,
)
from ca_lsp.protocols import EditApplier, Notifier
from ca_lsp.providers import Provider, ProviderCapabilities, ProviderRegistry, StaticProvider
from ca_lsp.resolver import SelectionResolver, needs_resolve

__all__ = [
    "NO_ACTIONS_MESSAGE",
    "AggregationResult",
    "ResultAggregator",
    "CommandHandler",
    "CommandRegistry",
    "Action",
    "CodeActionItem",
    "Command",
    "CommandAction",
    "EditAction",
    "RequestContext",
    "action_to_payload",
    "parse_action",
    "CodeActionParams",
    "Position",
    "Range",
    "cursor_params",
    "diagnostics_at_line",
    "selection_params",
    "EditApplier",
    "Notifier",
    "Provider",
    "ProviderCapabilities",
    "ProviderRegistry",
    "StaticProvider",
    "SelectionResolver",
    "needs_resolve",
]
