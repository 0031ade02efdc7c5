from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ca_common.api import configure_logging
from ca_ui.config import CodeActionsConfig, load_config
from ca_ui.tui.core.protocols import UI
from ca_ui.tui.system.components.surfaces import PromptToolkitSurfaces
from ca_ui.tui.system.facade import TUI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False
    config_path: Optional[Path] = None

    # Lazily initialized services
    _ui: Optional[UI] = None
    _config: Optional[CodeActionsConfig] = None
    menu_path: list[str] = field(default_factory=list)

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from ca_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI(next_menu_path=list(self.menu_path))
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def config(self) -> CodeActionsConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @config.setter
    def config(self, value: CodeActionsConfig):
        self._config = value

    def document_ui(
        self,
        lines: Sequence[str],
        cursor: tuple[int, int],
        menu_path: Sequence[str] = (),
    ) -> UI:
        """Return the UI for one document view, creating it if needed."""
        self.menu_path = list(menu_path)
        if self._ui is None and not self.headless:
            self._ui = TUI(
                surfaces=PromptToolkitSurfaces(lines, cursor=cursor),
                border=self.config.border,
            )
        ui = self.ui
        if self.headless and menu_path:
            from ca_ui.tui.system.headless import HeadlessUI

            if isinstance(ui, HeadlessUI):
                ui.next_menu_path[:] = self.menu_path
                ui.surfaces.script = list(self.menu_path)
        return ui


__all__ = [
    "UIContext",
    "configure_logging",
]
