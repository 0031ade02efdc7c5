"""Stable UI API surface."""

from __future__ import annotations

from ca_ui.config import CodeActionKeys, CodeActionsConfig, load_config
from ca_ui.flows.code_actions import CodeActionGroupFlow
from ca_ui.flows.errors import UIFlowError
from ca_ui.menu import (
    ActionGroup,
    FallbackPresenter,
    GroupedActionMenu,
    MenuSession,
    PartitionedActions,
    SurfaceState,
    WindowGeometry,
    compute_width,
    format_fallback_title,
    normalize_title,
    partition_actions,
)
from ca_ui.presenters.actions import build_action_table
from ca_ui.presenters.edits import PreviewEditApplier, build_edit_table, command_presenter
from ca_ui.tui import TUI, HeadlessSurfaces, HeadlessUI, UI
from ca_ui.tui.system.components.surfaces import PromptToolkitSurfaces
from ca_ui.tui.system.models import PickItem, SurfaceAnchor, TableModel

__all__ = [
    "ActionGroup",
    "CodeActionGroupFlow",
    "CodeActionKeys",
    "CodeActionsConfig",
    "FallbackPresenter",
    "GroupedActionMenu",
    "HeadlessSurfaces",
    "HeadlessUI",
    "MenuSession",
    "PartitionedActions",
    "PickItem",
    "PreviewEditApplier",
    "PromptToolkitSurfaces",
    "SurfaceAnchor",
    "SurfaceState",
    "TUI",
    "TableModel",
    "UI",
    "UIFlowError",
    "WindowGeometry",
    "build_action_table",
    "build_edit_table",
    "command_presenter",
    "compute_width",
    "format_fallback_title",
    "load_config",
    "normalize_title",
    "partition_actions",
]
