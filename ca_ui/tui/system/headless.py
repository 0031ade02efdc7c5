from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable, Sequence

from ca_common.errors import SurfaceError
from ca_ui.tui.core.bases import Presenter
from ca_ui.tui.core.protocols import Picker, PresenterSink, SurfaceBackend, TablePresenter, UI
from ca_ui.tui.system.models import PickItem, SurfaceAnchor, TableModel

EDITOR_FOCUS = 0


@dataclass
class RecordedTable:
    model: TableModel


@dataclass
class HeadlessContent:
    lines: list[str]
    cursor: int = 1
    bindings: dict[str, Callable[[], None]] = field(default_factory=dict)
    detach_callbacks: list[Callable[[], None]] = field(default_factory=list)
    cursor_callbacks: list[Callable[[], None]] = field(default_factory=list)


@dataclass
class HeadlessSurface:
    content: int
    width: int
    height: int
    anchor: SurfaceAnchor
    border: str
    return_focus: int | None = None


class HeadlessSurfaces(SurfaceBackend):
    """Recording surface backend.

    Mirrors editor behavior that matters to callers: closing a surface deletes
    its content and fires detach callbacks, and a surface regaining focus after
    another one closes reports a cursor move. ``script`` is a list of row labels
    replayed by ``run()``: each label moves the focused surface's cursor to the
    first row starting with it and presses the first bound key; an unknown
    label (or an empty script) presses ``quit_key`` instead.
    """

    def __init__(
        self,
        script: Sequence[str] = (),
        *,
        confirm_key: str = "enter",
        quit_key: str = "q",
    ) -> None:
        self.script = list(script)
        self.confirm_key = confirm_key
        self.quit_key = quit_key
        self._ids = itertools.count(1)
        self.contents: dict[int, HeadlessContent] = {}
        self.surfaces: dict[int, HeadlessSurface] = {}
        self.focused = EDITOR_FOCUS
        self.pending: list[Callable[[], None]] = []
        self.events: list[tuple[str, int]] = []
        self.redraws = 0

    def _content(self, content: int) -> HeadlessContent:
        try:
            return self.contents[content]
        except KeyError:
            raise SurfaceError(f"Invalid content handle: {content}") from None

    def _surface(self, surface: int) -> HeadlessSurface:
        try:
            return self.surfaces[surface]
        except KeyError:
            raise SurfaceError(f"Invalid surface handle: {surface}") from None

    # -- SurfaceBackend --------------------------------------------------

    def current_focus(self) -> int:
        return self.focused

    def restore_focus(self, token: int) -> None:
        if token != EDITOR_FOCUS:
            self._surface(token)
        self.focused = token

    def create_content(self, lines: Sequence[str]) -> int:
        content = next(self._ids)
        self.contents[content] = HeadlessContent(lines=list(lines))
        return content

    def open_surface(
        self,
        content: int,
        *,
        width: int,
        height: int,
        anchor: SurfaceAnchor,
        border: str,
        enter: bool,
    ) -> int:
        self._content(content)
        if anchor.relative_to is not None:
            self._surface(anchor.relative_to)
        surface = next(self._ids)
        self.surfaces[surface] = HeadlessSurface(
            content=content, width=width, height=height, anchor=anchor, border=border
        )
        self.events.append(("open", surface))
        if enter:
            self.focus(surface)
        return surface

    def close_surface(self, surface: int) -> None:
        data = self._surface(surface)
        del self.surfaces[surface]
        content = self.contents.pop(data.content, None)
        self.events.append(("close", surface))
        if content is not None:
            for callback in list(content.detach_callbacks):
                callback()
        if self.focused == surface:
            target = data.return_focus
            if target is None or target not in self.surfaces:
                target = EDITOR_FOCUS
            self.focused = target
            if target != EDITOR_FOCUS:
                self._fire_cursor_moved(self.surfaces[target].content)

    def cursor_line(self, surface: int) -> int:
        return self._content(self._surface(surface).content).cursor

    def focus(self, surface: int) -> None:
        data = self._surface(surface)
        if data.return_focus is None:
            data.return_focus = self.focused
        self.focused = surface

    def bind_keys(self, content: int, keys: Sequence[str], callback: Callable[[], None]) -> None:
        data = self._content(content)
        for key in keys:
            data.bindings[key] = callback

    def on_detach(self, content: int, callback: Callable[[], None]) -> None:
        self._content(content).detach_callbacks.append(callback)

    def on_cursor_moved(self, content: int, callback: Callable[[], None]) -> None:
        self._content(content).cursor_callbacks.append(callback)

    def redraw(self) -> None:
        self.redraws += 1

    def schedule(self, callback: Callable[[], None]) -> None:
        self.pending.append(callback)

    async def run(self) -> None:
        self.run_pending()
        for label in self.script:
            if self.focused == EDITOR_FOCUS:
                break
            line = self._find_line(self.focused, label)
            if line is None:
                self.press(self.focused, self.quit_key)
                self.run_pending()
                break
            self.move_cursor(self.focused, line)
            self.run_pending()
            self.press(self.focused, self.confirm_key)
            self.run_pending()
        if self.focused != EDITOR_FOCUS:
            self.press(self.focused, self.quit_key)
        self.run_pending()

    # -- test helpers ----------------------------------------------------

    def run_pending(self) -> None:
        while self.pending:
            self.pending.pop(0)()

    def lines(self, surface: int) -> list[str]:
        return list(self._content(self._surface(surface).content).lines)

    def move_cursor(self, surface: int, line: int) -> None:
        data = self._content(self._surface(surface).content)
        data.cursor = max(1, min(line, len(data.lines)))
        self._fire_cursor_moved(self._surface(surface).content)

    def press(self, surface: int, key: str) -> None:
        data = self._content(self._surface(surface).content)
        try:
            callback = data.bindings[key]
        except KeyError:
            raise SurfaceError(f"No binding for {key!r} on surface {surface}") from None
        self.events.append((f"press:{key}", surface))
        callback()

    def _fire_cursor_moved(self, content: int) -> None:
        for callback in list(self._content(content).cursor_callbacks):
            callback()

    def _find_line(self, surface: int, label: str) -> int | None:
        for number, line in enumerate(self.lines(surface), start=1):
            if line.startswith(label):
                return number
        return None


class _HeadlessPicker(Picker):
    def __init__(self, ui: "HeadlessUI"):
        self._ui = ui

    async def pick_one(
        self, items: Sequence[PickItem], *, title: str, query_hint: str = ""
    ) -> PickItem | None:
        self._ui.recorded_picks.append((title, [item.title for item in items]))
        if self._ui.next_pick_id is not None:
            return next((item for item in items if item.id == self._ui.next_pick_id), None)
        if self._ui.next_menu_path:
            # Flat choosers take the first label of the scripted menu path.
            label = self._ui.next_menu_path[0]
            return next((item for item in items if item.title.startswith(label)), None)
        return None


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: "HeadlessUI"):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(RecordedTable(table))


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: "HeadlessUI") -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")


class _HeadlessPresenter(Presenter):
    def __init__(self, ui: "HeadlessUI") -> None:
        super().__init__(_HeadlessPresenterSink(ui))


@dataclass
class HeadlessUI(UI):
    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)
    recorded_picks: list[tuple[str, list[str]]] = field(default_factory=list)

    # Configuration for automated responses
    next_pick_id: str | None = None
    next_menu_path: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.picker = _HeadlessPicker(self)
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)
        self.surfaces = HeadlessSurfaces(self.next_menu_path)
