# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Commands reporting what the configured cppcheck binary offers."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..errors import SettingsError
from ..settings import load_settings
from ..tool_info import fetch_option_help, probe_version
from ._shared import DEFAULT_BINARY, EXIT_CONFIG, CLIError, build_cli_logger

BinaryOption = Annotated[str | None, typer.Option("--binary", help="cppcheck executable.")]
RootOption = Annotated[Path, typer.Option("--root", "-r", help="Project root.")]


def _configured_binary(root: Path, binary: str | None) -> str:
    if binary:
        return binary
    try:
        configured = load_settings(root).binary_file
    except SettingsError as exc:
        raise CLIError(str(exc), exit_code=EXIT_CONFIG) from exc
    return configured or DEFAULT_BINARY


def options_command(binary: BinaryOption = None, root: RootOption = Path(".")) -> None:
    """Print the option reference of the cppcheck binary."""

    logger = build_cli_logger()
    try:
        executable = _configured_binary(root, binary)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    text = fetch_option_help(executable)
    if text is None:
        logger.fail(f"Could not read the option help of {executable}")
        raise typer.Exit(code=1)
    logger.echo(text)


def version_command(binary: BinaryOption = None, root: RootOption = Path(".")) -> None:
    """Print the version reported by the cppcheck binary."""

    logger = build_cli_logger()
    try:
        executable = _configured_binary(root, binary)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    version = probe_version(executable)
    if version is None:
        logger.fail(f"Could not determine the version of {executable}")
        raise typer.Exit(code=1)
    logger.echo(version)


__all__ = ["options_command", "version_command"]
