# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pending-file queue feeding the analysis runner."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import EmptyBatchError
from .models import RunBatch


class FileQueue:
    """Deduplicated, lexicographically sorted set of files awaiting a run."""

    def __init__(self) -> None:
        self._pending: set[str] = set()

    def enqueue(self, files: Iterable[str]) -> RunBatch:
        """Merge ``files`` into the queue.

        Args:
            files: Paths requested for checking.

        Returns:
            RunBatch: Sorted snapshot of the queue after the merge.

        Raises:
            EmptyBatchError: If ``files`` is empty; the queue is left untouched.
        """

        incoming = [str(path) for path in files]
        if not incoming:
            raise EmptyBatchError()
        self._pending.update(incoming)
        return self.snapshot()

    def snapshot(self) -> RunBatch:
        """Return the sorted queue content without draining it."""

        return tuple(sorted(self._pending))

    def drain(self) -> RunBatch:
        """Return the sorted queue content and empty the queue."""

        batch = self.snapshot()
        self._pending.clear()
        return batch

    def clear(self) -> None:
        """Drop every pending file."""

        self._pending.clear()

    def matches(self, batch: RunBatch) -> bool:
        """Return ``True`` when the queue holds exactly ``batch``."""

        return self.snapshot() == tuple(batch)

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)


__all__ = ["FileQueue"]
