"""Protocol side of grouped code actions: model, fan-out and resolve."""

from ca_lsp.api import (
    CodeActionItem,
    ProviderRegistry,
    ResultAggregator,
    SelectionResolver,
)

__all__ = ["CodeActionItem", "ProviderRegistry", "ResultAggregator", "SelectionResolver"]
