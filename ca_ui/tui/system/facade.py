from rich.console import Console

from ca_ui.tui.core.protocols import (
    Picker,
    Presenter,
    SurfaceBackend,
    TablePresenter,
    UI,
)
from ca_ui.tui.system.components.picker import PowerPicker
from ca_ui.tui.system.components.presenter import RichPresenter
from ca_ui.tui.system.components.surfaces import PromptToolkitSurfaces
from ca_ui.tui.system.components.table import RichTablePresenter


class TUI(UI):
    """Interactive UI: rich notices and tables, prompt_toolkit menus."""

    def __init__(
        self,
        console: Console | None = None,
        surfaces: SurfaceBackend | None = None,
        *,
        border: str = "rounded",
    ):
        self._console = console or Console()
        self.picker: Picker = PowerPicker()
        self.tables: TablePresenter = RichTablePresenter(self._console, border)
        self.present: Presenter = RichPresenter(self._console)
        self.surfaces: SurfaceBackend = surfaces or PromptToolkitSurfaces()
