# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Debounced, single-process cppcheck runner with typed diagnostics."""

from __future__ import annotations

from importlib import metadata

from .errors import EmptyBatchError, ListFileError, RunnerError, SettingsError
from .messages import ConsoleMessageSink, MemoryMessageSink, MessageLevel, MessageSink
from .models import CheckDiagnostic, CheckTrigger, ProgressUpdate, RunBatch, RunExit, RunnerState
from .progress import NullProgressSink, ProgressSink, RichProgressSink, RunProgress
from .runner import CheckRunner, RunnerHooks
from .settings import RunnerSettings, load_settings

try:
    __version__ = metadata.version("cppcheck-runner")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "CheckDiagnostic",
    "CheckRunner",
    "CheckTrigger",
    "ConsoleMessageSink",
    "EmptyBatchError",
    "ListFileError",
    "MemoryMessageSink",
    "MessageLevel",
    "MessageSink",
    "NullProgressSink",
    "ProgressSink",
    "ProgressUpdate",
    "RichProgressSink",
    "RunBatch",
    "RunExit",
    "RunProgress",
    "RunnerError",
    "RunnerHooks",
    "RunnerSettings",
    "RunnerState",
    "SettingsError",
    "__version__",
    "load_settings",
]
