# store_tool/cli/utils/progress.py
"""Progress display utilities"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.status import Status

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS
from ...core.status import StatusReporter


class RichStatusReporter(StatusReporter):
    """Shows each tracked step as a spinner followed by its outcome"""

    def __init__(self, console: Console = None):
        self.console = console or Console()
        self._status: Optional[Status] = None

    def message(self, text: str) -> None:
        self.console.print(escape(text))

    def on_start(self, message: str) -> None:
        self._stop()
        self._status = self.console.status(f"[bold green]{escape(message)}[/bold green]")
        self._status.start()

    def on_success(self, message: Optional[str]) -> None:
        self._stop()
        if message:
            self.console.print(f"[green]{EMOJI_SUCCESS}[/green] {escape(message)}")

    def on_error(self, message: str) -> None:
        self._stop()
        self.console.print(f"[red]{EMOJI_ERROR}[/red] {escape(message)}")

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
