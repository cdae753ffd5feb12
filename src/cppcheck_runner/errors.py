# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the runner components."""

from __future__ import annotations

from pathlib import Path


class RunnerError(Exception):
    """Base class for errors raised by :mod:`cppcheck_runner`."""


class EmptyBatchError(RunnerError, ValueError):
    """Raised when a caller asks to check an empty collection of files."""

    def __init__(self) -> None:
        super().__init__("check_files() requires at least one file")


class ListFileError(RunnerError):
    """Raised when the temporary argument list files cannot be written."""

    def __init__(self, path: Path | None, reason: str) -> None:
        """Initialise the error with the offending path and failure reason.

        Args:
            path: List file that failed to open, when known.
            reason: Human-readable description of the underlying failure.
        """

        target = str(path) if path is not None else "<unallocated>"
        super().__init__(f"Failed to write argument list file {target}: {reason}")
        self.path = path
        self.reason = reason


class SettingsError(RunnerError):
    """Raised when configuration input is invalid."""


__all__ = [
    "EmptyBatchError",
    "ListFileError",
    "RunnerError",
    "SettingsError",
]
