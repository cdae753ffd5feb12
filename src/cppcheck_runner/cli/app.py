# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from ._shared import configure_verbose_logging
from .check import check_command
from .config_cmd import config_app
from .probe import options_command, version_command

app = typer.Typer(help="Run cppcheck over C and C++ sources.", no_args_is_help=True)


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Stream debug logs to stderr.")] = False,
) -> None:
    if verbose:
        configure_verbose_logging()


app.command("check")(check_command)
app.command("options")(options_command)
app.command("version")(version_command)
app.add_typer(config_app, name="config")


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
