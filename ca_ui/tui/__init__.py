"""
UI adapter package providing prompt_toolkit/Rich-based and headless renderers.
"""

from ca_ui.tui.core.protocols import Picker, Presenter, SurfaceBackend, TablePresenter, UI
from ca_ui.tui.system.facade import TUI
from ca_ui.tui.system.headless import HeadlessSurfaces, HeadlessUI

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "HeadlessSurfaces",
    "Picker",
    "TablePresenter",
    "Presenter",
    "SurfaceBackend",
]
