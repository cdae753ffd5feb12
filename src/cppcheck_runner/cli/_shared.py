# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared helpers for CLI commands."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Final

import typer
from rich.console import Console

from ..logging import fail, ok, warn

EXIT_FINDINGS: Final[int] = 1
EXIT_CONFIG: Final[int] = 2
EXIT_INTERRUPTED: Final[int] = 130
DEFAULT_BINARY: Final[str] = "cppcheck"

_PACKAGE_LOGGER: Final[str] = "cppcheck_runner"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_CONFIG) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Route CLI output through the package logging helpers."""

    console: Console
    use_emoji: bool
    use_color: bool

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def ok(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout without decoration."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool = True, no_color: bool = False) -> CLILogger:
    """Return a :class:`CLILogger` bound to a dedicated Rich console.

    Args:
        emoji: Whether output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger writing to standard output.
    """

    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color)


def configure_verbose_logging() -> None:
    """Stream the package's debug records to stderr."""

    logger = logging.getLogger(_PACKAGE_LOGGER)
    if getattr(logger, "_cppcheck_runner_verbose", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_cppcheck_runner_verbose", True)


__all__ = [
    "CLIError",
    "CLILogger",
    "DEFAULT_BINARY",
    "EXIT_CONFIG",
    "EXIT_FINDINGS",
    "EXIT_INTERRUPTED",
    "build_cli_logger",
    "configure_verbose_logging",
]
