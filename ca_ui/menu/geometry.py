"""Surface width from the longest visible label."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from prompt_toolkit.utils import get_cwidth

from ca_lsp.models import CodeActionItem

PADDING = 5


@dataclass(frozen=True)
class WindowGeometry:
    width: int


def group_label(name: str, group_icon: str) -> str:
    return f"{name}{group_icon}"


def visible_label(item: CodeActionItem, is_group: bool, group_icon: str) -> str:
    if is_group and item.action.group:
        return group_label(item.action.group, group_icon)
    return item.title


def compute_width(
    items: Sequence[CodeActionItem],
    is_group: bool,
    group_icon: str = "",
) -> WindowGeometry:
    """Return the geometry for ``items`` rendered as group rows or titles.

    Width is measured in terminal cells, so wide glyphs count double.
    """
    widest = max(
        (get_cwidth(visible_label(item, is_group, group_icon)) for item in items),
        default=0,
    )
    return WindowGeometry(width=widest + PADDING)
