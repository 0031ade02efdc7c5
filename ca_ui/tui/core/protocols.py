from __future__ import annotations

from typing import Callable, Protocol, Sequence

from ca_ui.tui.system.models import PickItem, SurfaceAnchor, TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class Picker(Protocol):
    async def pick_one(
        self,
        items: Sequence[PickItem],
        *,
        title: str,
        query_hint: str = "",
    ) -> PickItem | None: ...


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...


class Presenter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...


class SurfaceBackend(Protocol):
    """Floating content surfaces with per-surface key bindings.

    A surface shows one content (a list of lines). Closing a surface deletes
    its content and fires the content's detach callbacks. Unknown handles
    raise ``SurfaceError``.
    """

    def current_focus(self) -> int: ...

    def restore_focus(self, token: int) -> None: ...

    def create_content(self, lines: Sequence[str]) -> int: ...

    def open_surface(
        self,
        content: int,
        *,
        width: int,
        height: int,
        anchor: SurfaceAnchor,
        border: str,
        enter: bool,
    ) -> int: ...

    def close_surface(self, surface: int) -> None: ...

    def cursor_line(self, surface: int) -> int: ...

    def focus(self, surface: int) -> None: ...

    def bind_keys(
        self, content: int, keys: Sequence[str], callback: Callable[[], None]
    ) -> None: ...

    def on_detach(self, content: int, callback: Callable[[], None]) -> None: ...

    def on_cursor_moved(self, content: int, callback: Callable[[], None]) -> None: ...

    def redraw(self) -> None: ...

    def schedule(self, callback: Callable[[], None]) -> None: ...

    async def run(self) -> None: ...


class UI(Protocol):
    picker: Picker
    tables: TablePresenter
    present: Presenter
    surfaces: SurfaceBackend
