"""Terminal progress display for command-line aggregation runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


@dataclass
class StageHandle:
    """Handle passed to the aggregator; advanced once per feed source."""

    progress: Progress
    task_id: TaskID

    def set_total(self, total: Optional[int]) -> None:
        self.progress.update(self.task_id, total=total)

    def advance(self, amount: int = 1) -> None:
        self.progress.advance(self.task_id, amount)


class AggregationProgress:
    """Context manager wrapping a rich progress bar for feed fetching."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}", justify="left"),
            BarColumn(bar_width=None),
            TextColumn("{task.completed}/{task.total}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )

    def __enter__(self) -> "AggregationProgress":
        self._progress.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._progress.__exit__(exc_type, exc, tb)

    def stage(self, description: str, total: Optional[int] = None) -> StageHandle:
        task_id = self._progress.add_task(description, total=total)
        return StageHandle(progress=self._progress, task_id=task_id)


__all__ = ["AggregationProgress", "StageHandle"]
