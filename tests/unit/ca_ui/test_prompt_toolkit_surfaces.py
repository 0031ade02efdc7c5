"""Tests for the prompt_toolkit floating surface backend."""

from __future__ import annotations

import asyncio

import pytest
from prompt_toolkit.input import DummyInput
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from ca_common.errors import SurfaceError
from ca_ui.tui.system.components.surfaces import (
    EDITOR_FOCUS,
    NUMBER_COLUMN_WIDTH,
    PromptToolkitSurfaces,
)
from ca_ui.tui.system.models import SurfaceAnchor


pytestmark = pytest.mark.unit_ui


def _backend() -> PromptToolkitSurfaces:
    return PromptToolkitSurfaces(
        ["fn main() {", "}"], cursor=(0, 3), input=DummyInput(), output=DummyOutput()
    )


def _open(backend, lines, *, anchor=None, enter=True, border="rounded"):
    content = backend.create_content(lines)
    surface = backend.open_surface(
        content,
        width=8,
        height=len(lines),
        anchor=anchor or SurfaceAnchor(row=1, col=0),
        border=border,
        enter=enter,
    )
    return content, surface


def _press(key_bindings, *keys) -> None:
    bindings = key_bindings.get_bindings_for_keys(tuple(keys))
    assert bindings, f"no binding for {keys}"
    bindings[-1].handler(None)


def test_open_focus_and_close() -> None:
    backend = _backend()
    detached = []
    content, surface = _open(backend, ["one", "two"])
    backend.on_detach(content, lambda: detached.append(content))

    assert backend.current_focus() == surface
    floats = backend._container.floats
    assert len(floats) == 1
    assert (floats[0].top, floats[0].left) == (1, 3)

    backend.close_surface(surface)

    assert backend._container.floats == []
    assert detached == [content]
    assert backend.current_focus() == EDITOR_FOCUS
    with pytest.raises(SurfaceError):
        backend.close_surface(surface)
    with pytest.raises(SurfaceError):
        backend.cursor_line(surface)


def test_relative_anchor_addresses_parent_text_area() -> None:
    backend = _backend()
    _, parent = _open(backend, ["Clippy", "Add import"])
    _, child = _open(
        backend,
        ["Fix A"],
        anchor=SurfaceAnchor(row=-1, col=9, relative_to=parent),
        enter=False,
    )

    child_float = backend._container.floats[1]
    assert child_float.top == 1 + 1 - 1
    assert child_float.left == 3 + 1 + NUMBER_COLUMN_WIDTH + 9
    assert backend.current_focus() == parent

    with pytest.raises(SurfaceError):
        _open(backend, ["x"], anchor=SurfaceAnchor(row=0, col=0, relative_to=999))


def test_navigation_moves_cursor_and_fires_callbacks() -> None:
    backend = _backend()
    content, surface = _open(backend, ["a", "b"])
    moves = []
    backend.on_cursor_moved(content, lambda: moves.append(backend.cursor_line(surface)))
    kb = backend._contents[content].key_bindings

    _press(kb, Keys.Down)
    _press(kb, "j")
    _press(kb, Keys.Up)

    assert moves == [2, 1]
    assert backend.cursor_line(surface) == 1


def test_bind_keys_supports_sequences() -> None:
    backend = _backend()
    content, _ = _open(backend, ["a"])
    calls = []
    backend.bind_keys(content, ["enter", "g g"], lambda: calls.append("hit"))
    kb = backend._contents[content].key_bindings

    _press(kb, Keys.ControlM)
    _press(kb, "g", "g")

    assert calls == ["hit", "hit"]
    with pytest.raises(SurfaceError):
        backend.bind_keys(999, ["enter"], lambda: None)


def test_rows_are_numbered_with_cursor_highlight() -> None:
    backend = _backend()
    content, _ = _open(backend, ["first", "second"])

    fragments = backend._contents[content].control.text()

    assert fragments[0] == ("class:surface.number", "  1 ")
    assert fragments[1] == ("class:surface.cursorline", "first\n")
    assert fragments[3] == ("", "second\n")


def test_ctrl_c_closes_root_surfaces_only() -> None:
    backend = _backend()
    _, parent = _open(backend, ["a"])
    _, child = _open(
        backend, ["b"], anchor=SurfaceAnchor(row=0, col=2, relative_to=parent), enter=False
    )

    _press(backend.app.key_bindings, Keys.ControlC)

    assert parent not in backend._surfaces
    assert child in backend._surfaces


def test_schedule_runs_on_the_event_loop() -> None:
    backend = _backend()
    calls = []

    async def run():
        backend.schedule(lambda: calls.append("tick"))
        assert calls == []
        await asyncio.sleep(0)
        await backend.run()

    asyncio.run(run())
    assert calls == ["tick"]
