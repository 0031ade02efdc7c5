"""Flat fuzzy chooser used when no code action carries a group."""

from __future__ import annotations

from typing import Any, Sequence

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea
from rapidfuzz import fuzz, process

from ca_ui.tui.core import capabilities, theme
from ca_ui.tui.core.protocols import Picker
from ca_ui.tui.system.models import PickItem

FUZZY_LIMIT = 200
FUZZY_SCORE_CUTOFF = 50


def filter_items(items: Sequence[PickItem], query: str, *, fuzzy: bool = True) -> list[PickItem]:
    """Return ``items`` matching ``query``, best match first.

    An empty query keeps every item in its original order. Without ``fuzzy``
    the match is a case-insensitive substring test.
    """
    query = query.strip()
    if not query:
        return list(items)
    haystacks = [item.search_blob or item.title for item in items]
    if not fuzzy:
        needle = query.lower()
        return [item for item, text in zip(items, haystacks) if needle in text.lower()]
    matches = process.extract(
        query,
        haystacks,
        scorer=fuzz.WRatio,
        limit=FUZZY_LIMIT,
        score_cutoff=FUZZY_SCORE_CUTOFF,
    )
    return [items[index] for _, _, index in matches]


class ChooserState:
    """Filtered rows and the highlighted row of a flat chooser."""

    def __init__(self, items: Sequence[PickItem], *, fuzzy: bool = True, wrap: bool = True):
        self.items = list(items)
        self.fuzzy = fuzzy
        self.wrap = wrap
        self.filtered: list[PickItem] = list(self.items)
        self.index = 0

    @property
    def selected(self) -> PickItem | None:
        return self.filtered[self.index] if self.filtered else None

    def set_query(self, query: str) -> None:
        self.filtered = filter_items(self.items, query, fuzzy=self.fuzzy)
        self.index = 0

    def move(self, delta: int) -> None:
        if not self.filtered:
            return
        if self.wrap:
            self.index = (self.index + delta) % len(self.filtered)
        else:
            self.index = max(0, min(self.index + delta, len(self.filtered) - 1))


class _PickerApp:
    def __init__(self, items: Sequence[PickItem], title: str, **app_kwargs: Any):
        self.state = ChooserState(items)
        self.search = TextArea(height=1, prompt="Filter: ", style="class:search", multiline=False)
        body = HSplit(
            [
                self.search,
                Window(height=1, char="-", style="class:separator"),
                Window(FormattedTextControl(self._render_rows, focusable=False)),
                Window(FormattedTextControl(self._render_description), height=1),
            ]
        )
        self.app: Application = Application(
            layout=Layout(Frame(body, title=title), focused_element=self.search),
            key_bindings=self._keybindings(),
            style=Style.from_dict(dict(theme.prompt_toolkit_picker_style())),
            full_screen=True,
            **app_kwargs,
        )
        self.search.buffer.on_text_changed += lambda _: self._apply_filter()

    @property
    def selected(self) -> PickItem | None:
        return self.state.selected

    def _apply_filter(self) -> None:
        self.state.set_query(self.search.text)
        self.app.invalidate()

    def _render_rows(self) -> list[tuple[str, str]]:
        frags: list[tuple[str, str]] = []
        for row, item in enumerate(self.state.filtered):
            style = "class:selected" if row == self.state.index else ""
            frags.append(("class:number", f"{item.id:>3} "))
            frags.append((style, f"{item.title}\n"))
        return frags

    def _render_description(self) -> list[tuple[str, str]]:
        item = self.state.selected
        if item is None or not item.description:
            return []
        return [("class:description", item.description)]

    def _keybindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("down")
        @kb.add("c-n")
        def _(e: Any) -> None:
            self.state.move(1)
            self.app.invalidate()

        @kb.add("up")
        @kb.add("c-p")
        def _(e: Any) -> None:
            self.state.move(-1)
            self.app.invalidate()

        @kb.add("enter")
        def _(e: Any) -> None:
            e.app.exit(result=self.state.selected)

        @kb.add("escape")
        @kb.add("c-c")
        def _(e: Any) -> None:
            e.app.exit(result=None)

        return kb

    async def run(self) -> PickItem | None:
        return await self.app.run_async()


class PowerPicker(Picker):
    """Fuzzy-search chooser; answers ``None`` when there is no terminal."""

    async def pick_one(
        self,
        items: Sequence[PickItem],
        *,
        title: str,
        query_hint: str = "",
    ) -> PickItem | None:
        if not items or not capabilities.is_tty_available():
            return None
        app = _PickerApp(items, title)
        if query_hint:
            app.search.text = query_hint
        return await app.run()
