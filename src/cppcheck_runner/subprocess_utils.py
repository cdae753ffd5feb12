# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Blocking, shell-free wrappers for short-lived helper commands.

Long running analysis processes are supervised asynchronously by
:mod:`cppcheck_runner.runner`; this module only covers quick probes such as
``getconf ARG_MAX`` or ``cppcheck --version``.
"""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list
# without shell expansion.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


class ToolCommandError(RuntimeError):
    """Raised when a probe command exits with a non-zero status while ``check`` is true."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str | None) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


def resolve_executable(name: str) -> str:
    """Return a runnable path for ``name``.

    Args:
        name: Executable path or a bare command looked up on ``PATH``.

    Returns:
        str: Executable path, resolved through ``PATH`` for bare command names.

    Raises:
        FileNotFoundError: If a bare command cannot be found on ``PATH``.
    """

    candidate = Path(name).expanduser()
    if candidate.is_absolute() or any(sep and sep in name for sep in (os.sep, os.altsep)):
        return str(candidate)
    resolved = shutil.which(name)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{name}' was not found on PATH")
    return resolved


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


def run_command(
    args: Sequence[str],
    *,
    timeout: float | None = None,
    check: bool = False,
) -> CompletedProcess[str]:
    """Run ``args`` and capture text output.

    Args:
        args: Command and arguments; the command is resolved on ``PATH``.
        timeout: Seconds before the command is abandoned.
        check: Raise :class:`ToolCommandError` on a non-zero exit status.

    Returns:
        CompletedProcess[str]: Captured output. A timeout yields return code
        ``124`` with a note appended to stderr.

    Raises:
        ValueError: If ``args`` is empty.
        FileNotFoundError: If the executable cannot be resolved.
        ToolCommandError: When ``check`` is true and the command fails.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    normalized = [resolve_executable(args[0]), *args[1:]]
    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            check=False,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if check and completed.returncode != 0:
        raise ToolCommandError(normalized, completed.returncode, completed.stderr)
    return completed


__all__ = [
    "TIMEOUT_RETURNCODE",
    "ToolCommandError",
    "resolve_executable",
    "run_command",
]
