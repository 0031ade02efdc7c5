from dataclasses import dataclass
from typing import Any, Tuple


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]


@dataclass(frozen=True)
class PickItem:
    id: str
    title: str
    tags: Tuple[str, ...] = ()
    description: str = ""
    search_blob: str = ""
    payload: Any = None  # domain object


@dataclass(frozen=True)
class SurfaceAnchor:
    """Where a surface opens.

    ``relative_to`` is the surface id it is anchored to, or None for the
    editor cursor. ``row``/``col`` are offsets from that anchor.
    """

    row: int
    col: int
    relative_to: int | None = None
