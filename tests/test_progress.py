# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for progress sinks."""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console

from cppcheck_runner.progress import (
    PROGRESS_TITLE,
    NullProgressSink,
    RichProgressSink,
    RunProgress,
)


class _RecordingProgress:
    def __init__(self, *columns: object, **kwargs: Any) -> None:
        self.columns = columns
        self.kwargs = kwargs
        self.records: list[tuple[str, ...]] = []
        self._next = 0

    def add_task(self, description: str, *, total: int) -> int:
        self._next += 1
        self.records.append(("add", description, str(total)))
        return self._next

    def update(self, task_id: int, *, completed: int) -> None:
        self.records.append(("update", str(task_id), str(completed)))

    def remove_task(self, task_id: int) -> None:
        self.records.append(("remove", str(task_id)))

    def start(self) -> None:
        self.records.append(("start",))

    def stop(self) -> None:
        self.records.append(("stop",))


def test_null_sink_tracks_state_only() -> None:
    handle = NullProgressSink().begin(PROGRESS_TITLE, on_cancel=lambda: None)

    assert isinstance(handle, RunProgress)
    handle.update(30)
    handle.finish()
    handle.update(60)
    assert handle.finished


def test_rich_sink_adds_and_removes_tasks() -> None:
    created: list[_RecordingProgress] = []

    def factory(*columns: object, **kwargs: Any) -> _RecordingProgress:
        progress = _RecordingProgress(*columns, **kwargs)
        created.append(progress)
        return progress

    sink = RichProgressSink(progress_factory=factory)
    handle = sink.begin(PROGRESS_TITLE, on_cancel=lambda: None)
    handle.update(40)
    handle.finish()
    handle.finish()
    handle.update(90)

    assert len(created) == 1
    assert created[0].kwargs["transient"] is True
    assert created[0].records == [
        ("add", "Cppcheck", "100"),
        ("start",),
        ("update", "1", "40"),
        ("remove", "1"),
        ("stop",),
    ]


def test_cancel_invokes_callbacks_of_active_runs() -> None:
    cancelled: list[str] = []
    sink = RichProgressSink(progress_factory=_RecordingProgress)

    first = sink.begin(PROGRESS_TITLE, on_cancel=lambda: cancelled.append("first"))
    sink.begin(PROGRESS_TITLE, on_cancel=lambda: cancelled.append("second"))
    first.finish()
    sink.cancel()

    assert cancelled == ["second"]


def test_rich_sink_renders_with_real_progress() -> None:
    console = Console(file=io.StringIO(), force_terminal=False)
    sink = RichProgressSink(console=console)

    handle = sink.begin(PROGRESS_TITLE, on_cancel=lambda: None)
    handle.update(100)
    handle.finish()

    assert handle.finished
    assert not sink.progress.tasks
