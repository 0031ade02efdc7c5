import pytest

from ca_ui.menu.geometry import PADDING, compute_width
from ca_ui.menu.partition import partition_actions


pytestmark = pytest.mark.unit_ui


def test_width_is_longest_title_plus_padding(make_items) -> None:
    items = make_items([{"title": "short"}, {"title": "a longer title"}])
    partition_actions(items)
    assert compute_width(items, False).width == len("a longer title") + PADDING


def test_group_rows_measure_group_label_and_icon(make_items) -> None:
    items = make_items(
        [{"title": "Fix A", "group": "Clippy lints"}, {"title": "Add import"}]
    )
    partition_actions(items)
    assert compute_width(items, True, " >").width == len("Clippy lints >") + PADDING
    assert compute_width(items, False, " >").width == len("Add import") + PADDING


def test_wide_characters_count_double(make_items) -> None:
    items = make_items([{"title": "修正"}])
    partition_actions(items)
    assert compute_width(items, False).width == 4 + PADDING


def test_empty_item_set() -> None:
    assert compute_width([], True).width == PADDING
