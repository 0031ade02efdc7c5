from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

import pytest

from ca_lsp.models import CodeActionItem, RequestContext, parse_action
from ca_lsp.params import CODE_ACTION_METHOD, Position, cursor_params

URI = "file:///project/src/main.rs"

ItemFactory = Callable[..., list[CodeActionItem]]


@pytest.fixture
def make_items() -> ItemFactory:
    """Build CodeActionItems from raw payloads, all from one provider."""

    def factory(
        payloads: Sequence[Mapping[str, Any]], provider_id: int = 1
    ) -> list[CodeActionItem]:
        ctx = RequestContext(
            provider_id=provider_id,
            method=CODE_ACTION_METHOD,
            params=cursor_params(URI, Position(0, 0)),
        )
        return [CodeActionItem(action=parse_action(payload), ctx=ctx) for payload in payloads]

    return factory


@pytest.fixture
def clippy_payloads() -> list[dict[str, Any]]:
    return [
        {"title": "Fix A", "group": "Clippy"},
        {"title": "Fix B", "group": "Clippy"},
        {"title": "Add import"},
    ]
