"""Partitioning, geometry and the two-tier menu state machine."""

from ca_ui.menu.fallback import FallbackPresenter, format_fallback_title
from ca_ui.menu.geometry import WindowGeometry, compute_width
from ca_ui.menu.machine import GroupedActionMenu
from ca_ui.menu.partition import (
    ActionGroup,
    PartitionedActions,
    normalize_title,
    partition_actions,
)
from ca_ui.menu.state import MenuSession, SurfaceState

__all__ = [
    "ActionGroup",
    "FallbackPresenter",
    "GroupedActionMenu",
    "MenuSession",
    "PartitionedActions",
    "SurfaceState",
    "WindowGeometry",
    "compute_width",
    "format_fallback_title",
    "normalize_title",
    "partition_actions",
]
