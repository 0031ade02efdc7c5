"""Rich rendering of TableModel rows (action listings, workspace edits)."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ca_ui.tui.core import theme
from ca_ui.tui.core.protocols import TablePresenter
from ca_ui.tui.system.models import TableModel

MIN_COLUMN_WIDTH = 4


def build_rich_table(model: TableModel, *, width: int, box_style: box.Box = box.ROUNDED) -> Table:
    """Build a one-line-per-row table no wider than ``width``.

    Cells never wrap; long titles and edit texts end in an ellipsis. Rows
    shorter than the header are padded with empty cells.
    """
    table = Table(
        title=Text(model.title, no_wrap=True, overflow="ellipsis"),
        box=box_style,
        border_style=theme.ACCENT,
        header_style=theme.ACCENT_BOLD,
        title_style=theme.ACCENT_BOLD,
    )
    cap = max(40, width - 2)
    for idx, column in enumerate(model.columns):
        cells = [row[idx] for row in model.rows if idx < len(row)]
        longest = max([len(column), *(len(str(cell)) for cell in cells)])
        table.add_column(
            column,
            no_wrap=True,
            overflow="ellipsis",
            min_width=MIN_COLUMN_WIDTH,
            max_width=min(max(longest, MIN_COLUMN_WIDTH), cap),
        )
    for row in model.rows:
        cells = [str(cell) for cell in row]
        cells += [""] * (len(model.columns) - len(cells))
        table.add_row(*cells)
    return table


class RichTablePresenter(TablePresenter):
    def __init__(self, console: Console, border: str = "rounded"):
        self._console = console
        self._box = theme.TABLE_BOXES.get(border, box.ROUNDED)

    def show(self, table: TableModel) -> None:
        self._console.print(build_rich_table(table, width=self._console.width, box_style=self._box))
