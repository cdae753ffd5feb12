# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the cppcheck_runner package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

FAILED_TO_START_CODE: Final[int] = -1

RunBatch = tuple[str, ...]


class RunnerState(str, Enum):
    """Lifecycle states of the supervised analysis process."""

    IDLE = "idle"
    RUNNING = "running"
    FINISHING = "finishing"


class CheckTrigger(str, Enum):
    """Host events that may request a check."""

    BUILD = "build"
    SAVE = "save"
    PROJECT_CHANGE = "project_change"
    FILE_ADD = "file_add"


class CheckDiagnostic(BaseModel):
    """Structured finding parsed from one line of the tool's error stream."""

    model_config = ConfigDict(frozen=True)

    severity: str = Field(min_length=1, max_length=1)
    code: str = ""
    message: str
    file: str
    line: int = 0

    @property
    def is_error(self) -> bool:
        """Return ``True`` when the diagnostic reports an error severity."""

        return self.severity == "e"


@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    """Completion percentage reported by the tool on stdout."""

    percent: int


@dataclass(frozen=True, slots=True)
class RunExit:
    """Outcome of one analysis process, delivered on every exit path."""

    returncode: int
    batch: RunBatch
    failed_to_start: bool = False

    @property
    def ok(self) -> bool:
        """Return ``True`` when the process started and exited with status zero."""

        return not self.failed_to_start and self.returncode == 0


__all__ = [
    "FAILED_TO_START_CODE",
    "CheckDiagnostic",
    "CheckTrigger",
    "ProgressUpdate",
    "RunBatch",
    "RunExit",
    "RunnerState",
]
