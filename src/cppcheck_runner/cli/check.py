# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""One-shot ``check`` command driving a :class:`CheckRunner` pass."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer

from ..errors import SettingsError
from ..macros import MacroExpander, VariableMacroExpander
from ..messages import ConsoleMessageSink, MessageSink
from ..models import CheckDiagnostic, RunExit
from ..progress import ProgressSink, RichProgressSink
from ..runner import CheckRunner, ProcessFactory, RunnerHooks
from ..selection import select_files
from ..settings import RunnerSettings, load_settings
from ..subprocess_utils import resolve_executable
from ._rendering import render_diagnostics
from ._shared import (
    DEFAULT_BINARY,
    EXIT_CONFIG,
    EXIT_FINDINGS,
    EXIT_INTERRUPTED,
    CLIError,
    CLILogger,
    build_cli_logger,
)

PROJECT_DIR_VARIABLE = "ProjectDir"


@dataclass(slots=True)
class CheckReport:
    """Events collected while a one-shot check ran."""

    diagnostics: list[CheckDiagnostic] = field(default_factory=list)
    exits: list[RunExit] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return ``True`` when an error-severity diagnostic was reported."""

        return any(diagnostic.is_error for diagnostic in self.diagnostics)

    @property
    def failed_to_start(self) -> bool:
        """Return ``True`` when any dispatched process could not be started."""

        return any(outcome.failed_to_start for outcome in self.exits)


async def run_check(
    settings: RunnerSettings,
    files: Sequence[str],
    *,
    include_paths: Sequence[str] = (),
    messages: MessageSink | None = None,
    progress: ProgressSink | None = None,
    expander: MacroExpander | None = None,
    spawn: ProcessFactory | None = None,
    max_length: int | None = None,
) -> CheckReport:
    """Check ``files`` once and return the collected events.

    Args:
        settings: Configuration snapshot for the run.
        files: Files to analyse; must not be empty.
        include_paths: Include directories passed as ``-I`` flags.
        messages: Sink for runner output.
        progress: Sink for progress reporting.
        expander: Macro expander for the custom parameters.
        spawn: Process factory override.
        max_length: Command-line limit override.

    Returns:
        CheckReport: Diagnostics and exit outcomes of the pass.
    """

    report = CheckReport()
    hooks = RunnerHooks(diagnostic=report.diagnostics.append, run_finished=report.exits.append)
    runner = CheckRunner(
        settings,
        hooks=hooks,
        messages=messages,
        progress=progress,
        expander=expander,
        spawn=spawn,
        max_length=max_length,
        check_delay=0,
    )
    runner.set_include_paths(include_paths)
    try:
        runner.check_files(files)
        await runner.wait_idle()
    finally:
        runner.close()
    return report


def resolve_check_settings(root: Path, **overrides: object) -> RunnerSettings:
    """Load settings for ``root``, apply ``overrides`` and resolve the binary.

    Raises:
        CLIError: If the configuration is invalid or the binary cannot be found.
    """

    try:
        settings = load_settings(root).with_overrides(**overrides)
    except SettingsError as exc:
        raise CLIError(str(exc), exit_code=EXIT_CONFIG) from exc
    binary = settings.binary_file or DEFAULT_BINARY
    try:
        resolved = resolve_executable(binary)
    except FileNotFoundError as exc:
        raise CLIError(str(exc), exit_code=EXIT_CONFIG) from exc
    return settings.with_overrides(binary_file=resolved)


def _summarise(report: CheckReport, settings: RunnerSettings, logger: CLILogger) -> int:
    if not report.exits:
        logger.fail("cppcheck was not run")
        return EXIT_CONFIG
    if report.failed_to_start:
        logger.fail(f"Failed to start {settings.binary_file}")
        return EXIT_CONFIG
    count = len(report.diagnostics)
    if report.has_errors:
        logger.fail(f"{count} diagnostic(s) reported, including errors")
        return EXIT_FINDINGS
    if count:
        logger.warn(f"{count} diagnostic(s) reported")
    else:
        logger.ok("No issues found")
    return 0


def check_command(
    files: Annotated[list[Path], typer.Argument(help="Source files to analyse.")],
    root: Annotated[Path, typer.Option("--root", "-r", help="Project root holding the configuration.")] = Path("."),
    include: Annotated[
        list[Path] | None,
        typer.Option("--include", "-I", help="Include directory; repeat for several."),
    ] = None,
    binary: Annotated[str | None, typer.Option("--binary", help="cppcheck executable.")] = None,
    show_id: Annotated[bool | None, typer.Option("--show-id/--hide-id", help="Show check ids.")] = None,
    show_output: Annotated[
        bool | None,
        typer.Option("--show-output/--hide-output", help="Echo the raw cppcheck output."),
    ] = None,
    unused: Annotated[bool | None, typer.Option("--unused/--no-unused", help="Report unused functions.")] = None,
    inconclusive: Annotated[
        bool | None,
        typer.Option("--inconclusive/--no-inconclusive", help="Report inconclusive findings."),
    ] = None,
    params: Annotated[str | None, typer.Option("--params", help="Extra cppcheck parameters.")] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """Run cppcheck once over FILES and report its diagnostics."""

    logger = build_cli_logger(no_color=no_color)
    try:
        settings = resolve_check_settings(
            root,
            binary_file=binary,
            show_id=show_id,
            show_binary_output=show_output,
            check_unused=unused,
            check_inconclusive=inconclusive,
            custom_parameters=params,
        )
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    selected = select_files(files, settings.ignore_patterns)
    if not selected:
        logger.warn("Every file matched an ignore pattern; nothing to check")
        return

    messages = ConsoleMessageSink(use_color=logger.use_color, console=logger.console)
    progress = RichProgressSink(console=logger.console)
    expander = VariableMacroExpander(variables={PROJECT_DIR_VARIABLE: str(root.resolve())})
    try:
        report = asyncio.run(
            run_check(
                settings,
                selected,
                include_paths=[str(path) for path in include or ()],
                messages=messages,
                progress=progress,
                expander=expander,
            ),
        )
    except KeyboardInterrupt as exc:
        logger.warn("Check interrupted")
        raise typer.Exit(code=EXIT_INTERRUPTED) from exc

    render_diagnostics(logger.console, report.diagnostics, show_id=settings.show_id, color=logger.use_color)
    raise typer.Exit(code=_summarise(report, settings, logger))


__all__ = [
    "CheckReport",
    "check_command",
    "resolve_check_settings",
    "run_check",
]
