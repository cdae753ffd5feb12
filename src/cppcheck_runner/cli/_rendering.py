# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich rendering helpers for CLI check results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import CheckDiagnostic

# Both "performance" and "portability" reduce to "p".
SEVERITY_LABELS: Final[dict[str, str]] = {
    "e": "error",
    "w": "warning",
    "s": "style",
    "p": "performance",
    "i": "information",
    "d": "debug",
}
SEVERITY_STYLES: Final[dict[str, str]] = {
    "e": "red",
    "w": "yellow",
    "s": "cyan",
    "p": "magenta",
    "i": "blue",
}


def severity_label(severity: str) -> str:
    """Return the display name for a one-letter severity."""

    return SEVERITY_LABELS.get(severity, severity)


def sort_diagnostics(diagnostics: Sequence[CheckDiagnostic]) -> list[CheckDiagnostic]:
    """Return ``diagnostics`` ordered by file, line and check id."""

    return sorted(diagnostics, key=lambda diag: (diag.file, diag.line, diag.code, diag.message))


def build_diagnostics_table(
    diagnostics: Sequence[CheckDiagnostic],
    *,
    show_id: bool,
    color: bool,
) -> Table:
    """Return a table listing ``diagnostics``.

    Args:
        diagnostics: Findings collected during the run.
        show_id: Include the check id column.
        color: Apply severity colours.

    Returns:
        Table: Renderable diagnostics table.
    """

    table = Table(title="Diagnostics", box=box.SIMPLE_HEAVY if color else box.SIMPLE, expand=True)
    table.add_column("Location", overflow="fold")
    table.add_column("Severity")
    if show_id:
        table.add_column("Id")
    table.add_column("Message", overflow="fold")

    for diagnostic in sort_diagnostics(diagnostics):
        label = severity_label(diagnostic.severity)
        style = SEVERITY_STYLES.get(diagnostic.severity)
        severity = f"[{style}]{label}[/]" if color and style else label
        location = f"{diagnostic.file}:{diagnostic.line}" if diagnostic.line else diagnostic.file
        row: list[Text | str] = [Text(location), severity]
        if show_id:
            row.append(Text(diagnostic.code or "-"))
        row.append(Text(diagnostic.message))
        table.add_row(*row)
    return table


def render_diagnostics(
    console: Console,
    diagnostics: Sequence[CheckDiagnostic],
    *,
    show_id: bool,
    color: bool,
) -> None:
    """Print the diagnostics table when there is anything to show."""

    if diagnostics:
        console.print(build_diagnostics_table(diagnostics, show_id=show_id, color=color))


__all__ = [
    "build_diagnostics_table",
    "render_diagnostics",
    "severity_label",
    "sort_diagnostics",
]
