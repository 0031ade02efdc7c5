"""Presenter for partitioned code action rows."""

from __future__ import annotations

from ca_lsp.providers import ProviderRegistry
from ca_ui.menu.partition import PartitionedActions
from ca_ui.tui.system.models import TableModel


def build_action_table(
    actions: PartitionedActions,
    registry: ProviderRegistry,
    group_icon: str = "",
) -> TableModel:
    """One row per action, numbered the way the menu numbers them."""

    def provider_name(provider_id: int) -> str:
        provider = registry.get(provider_id)
        return provider.name if provider is not None else str(provider_id)

    rows: list[list[str]] = []
    for group_idx, group in enumerate(actions.groups(), start=1):
        for member_idx, item in enumerate(group.items, start=1):
            rows.append(
                [
                    f"{group.name}{group_icon}",
                    f"{group_idx}.{member_idx}",
                    item.title,
                    provider_name(item.ctx.provider_id),
                ]
            )
    offset = len(actions.grouped)
    for number, item in enumerate(actions.ungrouped, start=offset + 1):
        rows.append(["", str(number), item.title, provider_name(item.ctx.provider_id)])
    return TableModel(
        title="Code Actions",
        columns=["Group", "Index", "Action", "Provider"],
        rows=rows,
    )
