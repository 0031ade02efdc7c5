import pytest

from ca_lsp.providers import ProviderRegistry, StaticProvider
from ca_ui.menu.partition import partition_actions
from ca_ui.presenters.actions import build_action_table


pytestmark = pytest.mark.unit_ui


def test_rows_follow_menu_numbering(make_items) -> None:
    provider = StaticProvider("clippy")
    registry = ProviderRegistry([provider])
    items = make_items(
        [
            {"title": "Fix A", "group": "Clippy"},
            {"title": "Add import"},
            {"title": "Fix B\nrename", "group": "Clippy"},
            {"title": "Inline", "group": "Refactor"},
        ],
        provider_id=provider.id,
    )

    table = build_action_table(partition_actions(items), registry, " >")

    assert table.columns == ["Group", "Index", "Action", "Provider"]
    assert table.rows == [
        ["Clippy >", "1.1", "Fix A", "clippy"],
        ["Clippy >", "1.2", "Fix B rename", "clippy"],
        ["Refactor >", "2.1", "Inline", "clippy"],
        ["", "3", "Add import", "clippy"],
    ]


def test_unknown_provider_falls_back_to_id(make_items) -> None:
    items = make_items([{"title": "Add import"}], provider_id=999)

    table = build_action_table(partition_actions(items), ProviderRegistry())

    assert table.rows == [["", "1", "Add import", "999"]]
