# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for blocking helper command execution."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from cppcheck_runner.subprocess_utils import (
    TIMEOUT_RETURNCODE,
    ToolCommandError,
    resolve_executable,
    run_command,
)


def test_resolve_executable_keeps_paths(tmp_path: Path) -> None:
    assert resolve_executable(sys.executable) == sys.executable
    assert resolve_executable("./bin/tool") == str(Path("./bin/tool"))


def test_resolve_executable_rejects_unknown_command() -> None:
    with pytest.raises(FileNotFoundError):
        resolve_executable("definitely-not-a-real-command-xyz")


def test_run_command_captures_output() -> None:
    completed = run_command([sys.executable, "-c", "print('hello')"])

    assert completed.returncode == 0
    assert completed.stdout.strip() == "hello"


def test_run_command_check_raises() -> None:
    with pytest.raises(ToolCommandError) as excinfo:
        run_command([sys.executable, "-c", "import sys; sys.exit(3)"], check=True)

    assert excinfo.value.returncode == 3


def test_run_command_timeout_maps_to_124() -> None:
    completed = run_command([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in completed.stderr


def test_run_command_requires_arguments() -> None:
    with pytest.raises(ValueError):
        run_command([])
