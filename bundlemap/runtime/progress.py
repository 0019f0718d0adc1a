"""Rich-based progress reporting for build map construction.

Progress counters are advisory: the build never depends on them, and a
reporter that fails to render must not change the build result.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

logger = logging.getLogger("bundlemap.runtime.progress")


@runtime_checkable
class ProgressReporter(Protocol):
    """Receives stage progress from long-running build steps."""

    def start_stage(self, stage: str, total: int) -> None:
        """Begin tracking ``stage`` with ``total`` items."""

    def advance(self, stage: str, amount: int = 1) -> None:
        """Mark ``amount`` more items of ``stage`` as done."""

    def finish_stage(self, stage: str) -> None:
        """Mark ``stage`` as complete."""


class NullProgressReporter:
    """Reporter that ignores every update."""

    def start_stage(self, stage: str, total: int) -> None:
        pass

    def advance(self, stage: str, amount: int = 1) -> None:
        pass

    def finish_stage(self, stage: str) -> None:
        pass


@dataclass
class StageProgress:
    """Progress tracking for a single stage."""

    stage: str
    task_id: TaskID
    total: int
    completed: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def elapsed(self) -> float:
        """Get elapsed time for this stage."""
        end = self.end_time or time.time()
        return end - self.start_time

    @property
    def is_complete(self) -> bool:
        return self.end_time is not None


class RichProgressReporter:
    """Progress bars for build stages rendered with rich.

    Use as a context manager so the live display is started and stopped
    around the build.
    """

    def __init__(self, enabled: bool = True, console: Optional[Console] = None) -> None:
        """Initialize progress reporter.

        Args:
            enabled: Enable/disable progress display.
            console: Rich console (creates a stderr console if None).
        """
        self.enabled = enabled
        # Use stderr for Console to align with logging conventions
        self.console = console or Console(stderr=True)
        self._stages: Dict[str, StageProgress] = {}
        self._progress: Optional[Progress] = None
        if self.enabled:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[bold blue]{task.description}"),
                BarColumn(bar_width=40),
                MofNCompleteColumn(),
                TextColumn("•"),
                TimeElapsedColumn(),
                console=self.console,
                expand=False,
                transient=False,
            )

    def __enter__(self) -> "RichProgressReporter":
        if self._progress is not None:
            self._progress.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._progress is not None:
            self._progress.stop()

    @property
    def stages(self) -> Dict[str, StageProgress]:
        return dict(self._stages)

    def start_stage(self, stage: str, total: int) -> None:
        if not self.enabled or self._progress is None:
            return
        task_id = self._progress.add_task(description=stage, total=total)
        self._stages[stage] = StageProgress(stage=stage, task_id=task_id, total=total)

    def advance(self, stage: str, amount: int = 1) -> None:
        if not self.enabled or self._progress is None:
            return
        progress = self._stages.get(stage)
        if progress is None:
            return
        progress.completed += amount
        self._progress.advance(progress.task_id, amount)

    def finish_stage(self, stage: str) -> None:
        if not self.enabled or self._progress is None:
            return
        progress = self._stages.get(stage)
        if progress is None:
            return
        progress.end_time = time.time()
        self._progress.update(progress.task_id, completed=progress.total)
        logger.debug(
            "Stage '%s' finished: %d/%d in %.2fs",
            stage,
            progress.completed,
            progress.total,
            progress.elapsed,
        )


__all__ = [
    "NullProgressReporter",
    "ProgressReporter",
    "RichProgressReporter",
    "StageProgress",
]
