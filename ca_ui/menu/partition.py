"""Split aggregated actions into named groups and an ungrouped residue."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from ca_lsp.models import CodeActionItem

_NEWLINE_RUN = re.compile(r"[\n\r]+")


def normalize_title(title: str) -> str:
    """Collapse every run of newline characters to a single space."""
    return _NEWLINE_RUN.sub(" ", title)


@dataclass
class ActionGroup:
    name: str
    items: list[CodeActionItem] = field(default_factory=list)
    idx: int | None = None


@dataclass
class PartitionedActions:
    """Groups keyed by label (first-seen order) plus the ungrouped items."""

    grouped: dict[str, ActionGroup] = field(default_factory=dict)
    ungrouped: list[CodeActionItem] = field(default_factory=list)

    @property
    def has_groups(self) -> bool:
        return bool(self.grouped)

    def groups(self) -> list[ActionGroup]:
        return list(self.grouped.values())

    def group_at(self, idx: int) -> ActionGroup | None:
        for group in self.grouped.values():
            if group.idx == idx:
                return group
        return None

    def ungrouped_at(self, idx: int) -> CodeActionItem | None:
        for item in self.ungrouped:
            if item.action.idx == idx:
                return item
        return None

    def __iter__(self) -> Iterator[CodeActionItem]:
        for group in self.grouped.values():
            yield from group.items
        yield from self.ungrouped

    def __len__(self) -> int:
        return sum(len(group.items) for group in self.grouped.values()) + len(self.ungrouped)


def partition_actions(items: Iterable[CodeActionItem]) -> PartitionedActions:
    """Place every item in exactly one partition, keyed on its group label.

    Each item's display label is set to its normalized title; the raw action
    title is left untouched.
    """
    partitioned = PartitionedActions()
    for item in items:
        item.label = normalize_title(item.action.title)
        name = item.action.group
        if name:
            group = partitioned.grouped.get(name)
            if group is None:
                group = partitioned.grouped[name] = ActionGroup(name=name)
            group.items.append(item)
        else:
            partitioned.ungrouped.append(item)
    return partitioned
