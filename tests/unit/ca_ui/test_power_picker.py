import asyncio

import pytest
from prompt_toolkit.input import DummyInput
from prompt_toolkit.output import DummyOutput

from ca_ui.tui.system.components import picker as picker_module
from ca_ui.tui.system.components.picker import (
    ChooserState,
    PowerPicker,
    _PickerApp,
    filter_items,
)
from ca_ui.tui.system.models import PickItem


pytestmark = pytest.mark.unit_ui

ITEMS = [
    PickItem(id="1", title="Add import", description="quickfix"),
    PickItem(id="2", title="Remove unused variable"),
    PickItem(id="3", title="Inline\\nvariable"),
]


def test_fuzzy_filter_ranks_best_match_first() -> None:
    assert filter_items(ITEMS, "import")[0].title == "Add import"
    assert filter_items(ITEMS, "  ") == ITEMS


def test_substring_filter_without_fuzzy() -> None:
    matched = filter_items(ITEMS, "VARIABLE", fuzzy=False)
    assert [item.id for item in matched] == ["2", "3"]


def test_chooser_state_navigation() -> None:
    wrapping = ChooserState(ITEMS)
    wrapping.move(-1)
    assert wrapping.selected.id == "3"

    clamped = ChooserState(ITEMS, wrap=False)
    clamped.move(-1)
    assert clamped.selected.id == "1"
    clamped.move(10)
    assert clamped.selected.id == "3"

    clamped.set_query("zzzzzz")
    assert clamped.selected is None
    clamped.move(1)
    assert clamped.index == 0


def test_picker_app_filters_on_search() -> None:
    app = _PickerApp(ITEMS, title="Code actions:", input=DummyInput(), output=DummyOutput())
    app.search.text = "remove"
    assert app.selected.id == "2"
    assert app._render_description() == []

    app.search.text = ""
    assert app._render_description() == [("class:description", "quickfix")]
    assert app._render_rows()[:2] == [("class:number", "  1 "), ("class:selected", "Add import\n")]


def test_power_picker_returns_none_without_tty_or_items(monkeypatch) -> None:
    monkeypatch.setattr(picker_module.capabilities, "is_tty_available", lambda: False)
    picker = PowerPicker()
    assert asyncio.run(picker.pick_one(ITEMS, title="Code actions:")) is None
    assert asyncio.run(picker.pick_one([], title="Code actions:")) is None
