"""Two-tier code action menu: a primary list and a per-group secondary list."""

from __future__ import annotations

import logging
from typing import Callable

from ca_common.errors import SurfaceError
from ca_lsp.models import CodeActionItem
from ca_ui.config import CodeActionsConfig
from ca_ui.menu.geometry import compute_width, group_label
from ca_ui.menu.partition import ActionGroup
from ca_ui.menu.state import MenuSession, SurfaceState
from ca_ui.tui.core.protocols import SurfaceBackend
from ca_ui.tui.system.models import SurfaceAnchor

logger = logging.getLogger(__name__)

ChoiceCallback = Callable[[CodeActionItem], None]


class GroupedActionMenu:
    """Drives the primary/secondary surfaces of one ``MenuSession``.

    Primary rows are the groups (first-seen order) followed by the ungrouped
    actions, numbered ``1..G+U``. Moving onto a group row opens that group's
    members in a secondary surface anchored next to the row. Confirming runs
    ``on_choice`` for the action under the cursor and tears everything down.
    """

    def __init__(
        self,
        backend: SurfaceBackend,
        config: CodeActionsConfig,
        session: MenuSession,
        on_choice: ChoiceCallback,
    ) -> None:
        self.backend = backend
        self.config = config
        self.session = session
        self._on_choice = on_choice

    # -- open ------------------------------------------------------------

    def primary_rows(self) -> list[str]:
        """Assign display indices (groups first) and return the row labels."""
        actions = self.session.actions
        if actions is None:
            return []
        rows: list[str] = []
        for group in actions.groups():
            group.idx = len(rows) + 1
            rows.append(group_label(group.name, self.config.group_icon))
        for item in actions.ungrouped:
            item.action.idx = len(rows) + 1
            rows.append(item.title)
        return rows

    def open(self) -> None:
        session = self.session
        if session.actions is None or session.closed:
            raise SurfaceError("Cannot open a menu for a closed session")
        session.origin_focus = self.backend.current_focus()

        rows = self.primary_rows()
        geometry = compute_width(list(session.actions), True, self.config.group_icon)
        content = self.backend.create_content(rows)
        self.backend.bind_keys(content, self.config.keys.confirm, self.on_primary_confirm)
        self.backend.bind_keys(content, self.config.keys.quit, self.on_primary_quit)
        self.backend.on_cursor_moved(content, self.on_cursor_move)
        self.backend.on_detach(content, self.on_primary_detach)

        surface = self.backend.open_surface(
            content,
            width=geometry.width,
            height=len(rows),
            anchor=SurfaceAnchor(row=1, col=0),
            border=self.config.border,
            enter=True,
        )
        session.primary = SurfaceState(content=content, surface=surface, geometry=geometry)
        logger.debug("Opened primary surface %s with %d row(s)", surface, len(rows))
        # Entering a surface counts as a cursor move for the row it starts on.
        self.backend.schedule(self.on_cursor_move)

    def _open_secondary(self, group: ActionGroup, line: int) -> None:
        session = self.session
        primary = session.primary
        rows: list[str] = []
        for number, item in enumerate(group.items, start=1):
            item.action.idx = number
            rows.append(item.title)

        geometry = compute_width(group.items, False)
        content = self.backend.create_content(rows)
        self.backend.bind_keys(content, self.config.keys.confirm, self.on_secondary_confirm)
        self.backend.bind_keys(content, self.config.keys.quit, self.on_secondary_quit)
        surface = self.backend.open_surface(
            content,
            width=geometry.width,
            height=len(rows),
            anchor=SurfaceAnchor(
                row=line - 2,
                col=(primary.geometry.width if primary.geometry else 0) + 1,
                relative_to=primary.surface,
            ),
            border=self.config.border,
            enter=False,
        )
        session.secondary = SurfaceState(content=content, surface=surface, geometry=geometry)
        session.active_group_index = group.idx
        logger.debug("Opened secondary surface %s for group %r", surface, group.name)

    def _close_secondary(self) -> None:
        surface = self.session.secondary.detach()
        if surface is not None:
            self.backend.close_surface(surface)

    # -- events ----------------------------------------------------------

    def on_cursor_move(self) -> None:
        session = self.session
        if session.primary.surface is None or session.actions is None:
            return
        line = self.backend.cursor_line(session.primary.surface)
        group = session.actions.group_at(line)
        self._close_secondary()
        if group is None:
            session.active_group_index = None
            return
        self._open_secondary(group, line)
        self.backend.redraw()

    def on_primary_confirm(self) -> None:
        session = self.session
        if session.secondary.surface is not None:
            self.backend.focus(session.secondary.surface)
            return
        if session.primary.surface is None or session.actions is None:
            return
        line = self.backend.cursor_line(session.primary.surface)
        item = session.actions.ungrouped_at(line)
        if item is not None:
            self._on_choice(item)
        self.cleanup()

    def on_secondary_confirm(self) -> None:
        session = self.session
        if session.secondary.surface is None or session.actions is None:
            return
        group = (
            session.actions.group_at(session.active_group_index)
            if session.active_group_index is not None
            else None
        )
        if group is not None:
            line = self.backend.cursor_line(session.secondary.surface)
            item = next((it for it in group.items if it.action.idx == line), None)
            if item is not None:
                self._on_choice(item)
        self.cleanup()

    def on_primary_quit(self) -> None:
        self.cleanup()

    def on_secondary_quit(self) -> None:
        # Focus falls back to the primary once the secondary closes; an empty
        # primary slot keeps that cursor move from reopening a secondary.
        primary = self.session.primary.detach()
        self._close_secondary()
        if primary is not None:
            self.backend.close_surface(primary)
        self.cleanup()

    def on_primary_detach(self) -> None:
        session = self.session
        if session.primary.surface is None:
            # Torn down by this menu.
            return
        session.primary.clear()
        origin = session.origin_focus
        logger.debug("Primary surface detached externally")

        def finish() -> None:
            self.cleanup()
            if origin is None:
                return
            try:
                self.backend.restore_focus(origin)
            except SurfaceError as exc:
                logger.debug("Could not restore focus to %s: %s", origin, exc)

        self.backend.schedule(finish)

    # -- teardown --------------------------------------------------------

    def cleanup(self) -> None:
        """Close both surfaces and reset the session; safe to call repeatedly."""
        session = self.session
        primary = session.primary.detach()
        if primary is not None:
            self.backend.close_surface(primary)
        self._close_secondary()
        if not session.closed:
            logger.debug("Code action menu closed")
        session.reset()
