from rich.console import Console
from rich.markup import escape

from ca_ui.tui.core import theme
from ca_ui.tui.core.bases import Presenter
from ca_ui.tui.core.protocols import PresenterSink


class _RichNoticeSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        # Action titles routinely contain brackets (``Vec<[T]>``, ``#[derive]``).
        self._console.print(theme.presenter_message(level, escape(message)), highlight=False)


class RichPresenter(Presenter):
    def __init__(self, console: Console) -> None:
        super().__init__(_RichNoticeSink(console))
