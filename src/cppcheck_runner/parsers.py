# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line parsers for cppcheck progress output and template diagnostics."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .models import CheckDiagnostic, ProgressUpdate

PROGRESS_MARKER: Final[str] = "% done"
PROGRESS_MIN: Final[int] = 0
PROGRESS_MAX: Final[int] = 100
FIELD_SEPARATOR: Final[str] = ","

# Field order fixed by the ``--template`` flag.
FIELD_FILE: Final[int] = 0
FIELD_LINE: Final[int] = 1
FIELD_SEVERITY: Final[int] = 2
FIELD_ID: Final[int] = 3
FIELD_MESSAGE: Final[int] = 4
MIN_FIELDS: Final[int] = FIELD_MESSAGE + 1


def decode_line(raw: bytes | str) -> str:
    """Return ``raw`` decoded as UTF-8 and stripped of surrounding whitespace."""

    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return raw.strip()


def normalize_separators(path: str, *, sep: str = os.sep) -> str:
    """Convert native separators in ``path`` to ``/``."""

    if sep == "/":
        return path
    return path.replace(sep, "/")


def parse_progress(line: str) -> int | None:
    """Return the percentage announced by a ``... <n>% done`` line.

    Args:
        line: Stripped stdout line.

    Returns:
        int | None: Percentage in ``0..100``; ``None`` for other or malformed lines.
    """

    if not line.endswith(PROGRESS_MARKER):
        return None
    end = len(line) - len(PROGRESS_MARKER)
    start = line.rfind(" ", 0, end) + 1
    token = line[start:end]
    if not (token.isascii() and token.isdigit()):
        return None
    percent = int(token)
    if not PROGRESS_MIN <= percent <= PROGRESS_MAX:
        return None
    return percent


def _parse_line_number(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_diagnostic(line: str, *, show_id: bool, sep: str = os.sep) -> CheckDiagnostic | None:
    """Parse one ``file,line,severity,id,message`` stderr line.

    The message is taken from the first occurrence of the message field in
    the input line so commas inside it survive the split.

    Args:
        line: Stripped stderr line.
        show_id: Include the check id in the diagnostic.
        sep: Native path separator normalised to ``/`` in the file field.

    Returns:
        CheckDiagnostic | None: Parsed diagnostic, or ``None`` for malformed lines.
    """

    details = line.split(FIELD_SEPARATOR)
    if len(details) < MIN_FIELDS:
        return None
    severity = details[FIELD_SEVERITY].strip()
    if not severity:
        return None
    message_start = line.find(details[FIELD_MESSAGE])
    return CheckDiagnostic(
        severity=severity[0],
        code=details[FIELD_ID] if show_id else "",
        message=line[message_start:],
        file=normalize_separators(details[FIELD_FILE], sep=sep),
        line=_parse_line_number(details[FIELD_LINE]),
    )


@dataclass(slots=True)
class OutputParser:
    """Turn raw stdout/stderr lines of one run into typed events."""

    show_id: bool = False

    def parse_stdout(self, raw: bytes | str) -> ProgressUpdate | None:
        """Return a progress update for ``raw`` when it carries one."""

        percent = parse_progress(decode_line(raw))
        return None if percent is None else ProgressUpdate(percent)

    def parse_stderr(self, raw: bytes | str) -> CheckDiagnostic | None:
        """Return the diagnostic carried by ``raw``, if well formed."""

        line = decode_line(raw)
        if not line:
            return None
        return parse_diagnostic(line, show_id=self.show_id)


__all__ = [
    "OutputParser",
    "decode_line",
    "normalize_separators",
    "parse_diagnostic",
    "parse_progress",
]
