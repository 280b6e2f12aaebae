"""Download progress reporting."""

from collections.abc import Callable

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TransferSpeedColumn,
)

# Called with (bytes_written, expected_total) after every chunk
ProgressCallback = Callable[[int, int], None]


class RichProgressReporter:
    """Renders download progress as a rich progress bar.

    Use as a context manager and pass the instance as the downloader's
    progress callback.
    """

    def __init__(self, description: str, console: Console | None = None):
        self.description = description
        self.console = console or Console()
        self._progress = Progress(
            SpinnerColumn(style="green"),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            BarColumn(complete_style="cyan", finished_style="blue"),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=self.console,
        )
        self._task_id = None

    def __enter__(self) -> "RichProgressReporter":
        self._progress.start()
        self._task_id = self._progress.add_task(self.description, total=None)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None and self._task_id is not None:
            self._progress.update(self._task_id, description="Download complete.")
        self._progress.stop()

    def __call__(self, bytes_written: int, total: int) -> None:
        if self._task_id is None:
            return
        self._progress.update(
            self._task_id, completed=bytes_written, total=total or None
        )
