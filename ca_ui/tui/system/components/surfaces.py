"""Floating surfaces drawn with prompt_toolkit."""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Float, FloatContainer, HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import AnyContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from ca_common.errors import SurfaceError
from ca_ui.tui.core import theme
from ca_ui.tui.core.protocols import SurfaceBackend
from ca_ui.tui.system.models import SurfaceAnchor

logger = logging.getLogger(__name__)

EDITOR_FOCUS = 0
NUMBER_COLUMN_WIDTH = 4


def _framed(body: Window, glyphs: tuple[str, str, str, str, str, str]) -> AnyContainer:
    top_left, top_right, bottom_left, bottom_right, horizontal, vertical = glyphs

    def edge(char: str, **size: int) -> Window:
        return Window(char=char, style="class:surface.border", **size)

    def rule(left: str, right: str) -> VSplit:
        corner = {"width": 1, "height": 1}
        return VSplit([edge(left, **corner), edge(horizontal, height=1), edge(right, **corner)])

    return HSplit(
        [
            rule(top_left, top_right),
            VSplit([edge(vertical, width=1), body, edge(vertical, width=1)]),
            rule(bottom_left, bottom_right),
        ]
    )


@dataclass
class _Content:
    content_id: int
    lines: list[str]
    cursor: int = 1
    key_bindings: KeyBindings = field(default_factory=KeyBindings)
    detach_callbacks: list[Callable[[], None]] = field(default_factory=list)
    cursor_callbacks: list[Callable[[], None]] = field(default_factory=list)
    control: FormattedTextControl | None = None


@dataclass
class _Surface:
    content_id: int
    window: Window
    float_: Float
    top: int
    left: int
    bordered: bool
    anchor: SurfaceAnchor
    return_focus: int | None = None


class PromptToolkitSurfaces(SurfaceBackend):
    """Floating framed panels over a read-only editor view.

    ``editor_lines`` and ``cursor`` (zero-based row/col) describe the view the
    cursor-anchored surfaces open next to. The application exits once the
    last surface is closed.
    """

    def __init__(
        self,
        editor_lines: Sequence[str] = (),
        *,
        cursor: tuple[int, int] = (0, 0),
        **app_kwargs: Any,
    ) -> None:
        self._editor_lines = list(editor_lines)
        self._cursor = cursor
        self._ids = itertools.count(1)
        self._contents: dict[int, _Content] = {}
        self._surfaces: dict[int, _Surface] = {}
        self._focused = EDITOR_FOCUS

        self._editor_window = Window(
            FormattedTextControl(self._render_editor, focusable=True),
            style="class:editor",
        )
        self._container = FloatContainer(content=self._editor_window, floats=[])
        self.app: Application = Application(
            layout=Layout(self._container, focused_element=self._editor_window),
            key_bindings=self._global_bindings(),
            style=Style.from_dict(dict(theme.prompt_toolkit_surface_style())),
            full_screen=True,
            **app_kwargs,
        )

    # -- lookups ---------------------------------------------------------

    def _content(self, content_id: int) -> _Content:
        try:
            return self._contents[content_id]
        except KeyError:
            raise SurfaceError(f"Invalid content handle: {content_id}") from None

    def _surface(self, surface_id: int) -> _Surface:
        try:
            return self._surfaces[surface_id]
        except KeyError:
            raise SurfaceError(f"Invalid surface handle: {surface_id}") from None

    # -- rendering -------------------------------------------------------

    def _render_editor(self) -> list[tuple[str, str]]:
        frags: list[tuple[str, str]] = []
        row, col = self._cursor
        for i, line in enumerate(self._editor_lines):
            if i == row:
                before, at, after = line[:col], line[col : col + 1] or " ", line[col + 1 :]
                frags.extend([("", before), ("class:editor.cursor", at), ("", f"{after}\n")])
            else:
                frags.append(("", f"{line}\n"))
        return frags

    def _content_renderer(self, content: _Content) -> Callable[[], list[tuple[str, str]]]:
        def render() -> list[tuple[str, str]]:
            frags: list[tuple[str, str]] = []
            for number, line in enumerate(content.lines, start=1):
                style = "class:surface.cursorline" if number == content.cursor else ""
                frags.append(("class:surface.number", f"{number:>{NUMBER_COLUMN_WIDTH - 1}} "))
                frags.append((style, f"{line}\n"))
            return frags

        return render

    # -- SurfaceBackend --------------------------------------------------

    def current_focus(self) -> int:
        return self._focused

    def restore_focus(self, token: int) -> None:
        if token == EDITOR_FOCUS:
            self.app.layout.focus(self._editor_window)
            self._focused = EDITOR_FOCUS
            return
        self.focus(token)

    def create_content(self, lines: Sequence[str]) -> int:
        content_id = next(self._ids)
        content = _Content(content_id=content_id, lines=list(lines))
        content.control = FormattedTextControl(
            self._content_renderer(content),
            focusable=True,
            key_bindings=content.key_bindings,
            show_cursor=False,
        )
        self._bind_navigation(content)
        self._contents[content_id] = content
        return content_id

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
        data = self._content(content)
        if anchor.relative_to is None:
            top = self._cursor[0] + anchor.row
            left = self._cursor[1] + anchor.col
        else:
            # Relative anchors address the parent's text area, right of its gutter.
            parent = self._surface(anchor.relative_to)
            inset = 1 if parent.bordered else 0
            top = parent.top + inset + anchor.row
            left = parent.left + inset + NUMBER_COLUMN_WIDTH + anchor.col

        window = Window(
            data.control,
            width=width + NUMBER_COLUMN_WIDTH,
            height=max(1, height),
            style="class:surface",
        )
        glyphs = theme.surface_border(border)
        bordered = glyphs is not None
        body: AnyContainer = _framed(window, glyphs) if glyphs is not None else window
        float_ = Float(content=body, top=max(0, top), left=max(0, left))

        surface_id = next(self._ids)
        self._surfaces[surface_id] = _Surface(
            content_id=content,
            window=window,
            float_=float_,
            top=max(0, top),
            left=max(0, left),
            bordered=bordered,
            anchor=anchor,
        )
        self._container.floats.append(float_)
        logger.debug("Opened surface %s (content %s) at %s,%s", surface_id, content, top, left)
        if enter:
            self.focus(surface_id)
        return surface_id

    def close_surface(self, surface: int) -> None:
        data = self._surface(surface)
        del self._surfaces[surface]
        self._container.floats.remove(data.float_)
        content = self._contents.pop(data.content_id, None)
        logger.debug("Closed surface %s", surface)

        if self._focused == surface:
            target = data.return_focus
            if target is None or (target != EDITOR_FOCUS and target not in self._surfaces):
                target = EDITOR_FOCUS
            self.restore_focus(target)

        if content is not None:
            for callback in list(content.detach_callbacks):
                callback()

        if not self._surfaces and self.app.is_running:
            self.app.exit()
        self.redraw()

    def cursor_line(self, surface: int) -> int:
        return self._content(self._surface(surface).content_id).cursor

    def focus(self, surface: int) -> None:
        data = self._surface(surface)
        if data.return_focus is None:
            data.return_focus = self._focused
        self.app.layout.focus(data.window)
        self._focused = surface

    def bind_keys(self, content: int, keys: Sequence[str], callback: Callable[[], None]) -> None:
        data = self._content(content)
        for key in keys:

            @data.key_bindings.add(*key.split())
            def _(event: Any, callback: Callable[[], None] = callback) -> None:
                callback()

    def on_detach(self, content: int, callback: Callable[[], None]) -> None:
        self._content(content).detach_callbacks.append(callback)

    def on_cursor_moved(self, content: int, callback: Callable[[], None]) -> None:
        self._content(content).cursor_callbacks.append(callback)

    def redraw(self) -> None:
        self.app.invalidate()

    def schedule(self, callback: Callable[[], None]) -> None:
        asyncio.get_running_loop().call_soon(callback)

    async def run(self) -> None:
        if not self._surfaces:
            return
        await self.app.run_async()

    # -- navigation ------------------------------------------------------

    def move_cursor(self, content: int, delta: int) -> None:
        data = self._content(content)
        target = max(1, min(data.cursor + delta, len(data.lines)))
        if target == data.cursor:
            return
        data.cursor = target
        for callback in list(data.cursor_callbacks):
            callback()
        self.redraw()

    def _bind_navigation(self, content: _Content) -> None:
        kb = content.key_bindings

        @kb.add("down")
        @kb.add("j")
        def _(event: Any) -> None:
            self.move_cursor(content.content_id, 1)

        @kb.add("up")
        @kb.add("k")
        def _(event: Any) -> None:
            self.move_cursor(content.content_id, -1)

    def _global_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("c-c")
        def _(event: Any) -> None:
            # Dependent surfaces are torn down by their owners' detach handlers.
            for surface_id, data in list(self._surfaces.items()):
                if data.anchor.relative_to is None and surface_id in self._surfaces:
                    self.close_surface(surface_id)

        return kb
