# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration inspection commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from ..errors import SettingsError
from ..settings import load_settings
from ._shared import EXIT_CONFIG, build_cli_logger

config_app = typer.Typer(help="Inspect the runner configuration.", no_args_is_help=True)


@config_app.command("show")
def config_show(
    root: Annotated[Path, typer.Option("--root", "-r", help="Project root.")] = Path("."),
) -> None:
    """Print the effective settings for the project as JSON."""

    logger = build_cli_logger()
    try:
        settings = load_settings(root)
    except SettingsError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_CONFIG) from exc
    logger.echo(json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True))


__all__ = ["config_app", "config_show"]
