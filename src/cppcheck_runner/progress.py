# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress reporting for in-flight analysis runs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

PROGRESS_TITLE: Final[str] = "Cppcheck"
PROGRESS_TOTAL: Final[int] = 100

CancelCallback = Callable[[], None]


@runtime_checkable
class RunProgress(Protocol):
    """Handle tracking the progress of one analysis run."""

    @property
    def finished(self) -> bool:
        """Return ``True`` once :meth:`finish` has been called."""

        raise NotImplementedError

    def update(self, percent: int) -> None:
        """Record the completion percentage."""

        raise NotImplementedError

    def finish(self) -> None:
        """Mark the run as complete; repeated calls are no-ops."""

        raise NotImplementedError


@runtime_checkable
class ProgressSink(Protocol):
    """Factory of :class:`RunProgress` handles, one per run."""

    def begin(self, title: str, *, on_cancel: CancelCallback) -> RunProgress:
        """Start tracking a run and return its handle."""

        raise NotImplementedError


@dataclass(slots=True)
class NullRunProgress:
    """Handle that only tracks its own state."""

    percent: int = 0
    finished: bool = False

    def update(self, percent: int) -> None:
        if not self.finished:
            self.percent = percent

    def finish(self) -> None:
        self.finished = True


class NullProgressSink:
    """Progress sink for hosts without progress display."""

    def begin(self, title: str, *, on_cancel: CancelCallback) -> RunProgress:
        del title, on_cancel
        return NullRunProgress()


@dataclass(slots=True, eq=False)
class RichRunProgress:
    """Handle bound to one task of a shared Rich :class:`Progress`."""

    sink: RichProgressSink
    task_id: TaskID
    on_cancel: CancelCallback
    finished: bool = False

    def update(self, percent: int) -> None:
        """Move the task bar to ``percent``."""

        if self.finished:
            return
        self.sink.progress.update(self.task_id, completed=percent)

    def finish(self) -> None:
        """Remove the task and stop the display once no task remains."""

        if self.finished:
            return
        self.finished = True
        self.sink.release(self)


@dataclass(slots=True, eq=False)
class RichProgressSink:
    """Render run progress with a Rich progress bar."""

    console: Console | None = None
    progress_factory: Callable[..., Progress] = Progress
    _progress: Progress | None = field(default=None, init=False)
    _active: list[RichRunProgress] = field(default_factory=list, init=False)

    @property
    def progress(self) -> Progress:
        """Return the Rich progress instance, creating it on first use."""

        if self._progress is None:
            self._progress = self.progress_factory(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed:>3.0f}%"),
                TimeElapsedColumn(),
                console=self.console,
                transient=True,
            )
        return self._progress

    def begin(self, title: str, *, on_cancel: CancelCallback) -> RunProgress:
        """Add a task for a new run and start the display."""

        progress = self.progress
        task_id = progress.add_task(title, total=PROGRESS_TOTAL)
        handle = RichRunProgress(sink=self, task_id=task_id, on_cancel=on_cancel)
        if not self._active:
            progress.start()
        self._active.append(handle)
        return handle

    def release(self, handle: RichRunProgress) -> None:
        """Drop ``handle``'s task; stop the display when it was the last one."""

        if handle in self._active:
            self._active.remove(handle)
        progress = self.progress
        progress.remove_task(handle.task_id)
        if not self._active:
            progress.stop()

    def cancel(self) -> None:
        """Invoke the cancel callbacks of every active run."""

        for handle in list(self._active):
            handle.on_cancel()


__all__ = [
    "NullProgressSink",
    "NullRunProgress",
    "PROGRESS_TITLE",
    "ProgressSink",
    "RichProgressSink",
    "RichRunProgress",
    "RunProgress",
]
