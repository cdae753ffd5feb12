# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Probe the analysis binary for its version and option help."""

from __future__ import annotations

import logging
from typing import Final

from .arguments import HELP_FLAG, VERSION_FLAG
from .subprocess_utils import run_command

LOGGER = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS: Final[float] = 10.0
OPTIONS_START_MARKER: Final[str] = "Options:"
OPTIONS_END_MARKER: Final[str] = "Example usage:"


def probe_version(binary: str) -> str | None:
    """Return the stripped output of ``<binary> --version``.

    Args:
        binary: Path or command name of the analysis tool.

    Returns:
        str | None: Version banner, or ``None`` when the binary is unset,
        missing, or reports nothing.
    """

    if not binary:
        return None
    try:
        completed = run_command([binary, VERSION_FLAG], timeout=PROBE_TIMEOUT_SECONDS)
    except OSError as exc:
        LOGGER.debug("version probe for %s failed: %s", binary, exc)
        return None
    version = completed.stdout.strip()
    return version or None


def extract_option_help(text: str) -> str | None:
    """Return the option block of a ``--help`` text.

    The block starts at the ``Options:`` heading and stops before the
    ``Example usage:`` section.
    """

    start = text.find(OPTIONS_START_MARKER)
    if start < 0:
        return None
    end = text.find(OPTIONS_END_MARKER, start)
    if end < 0:
        return None
    return text[start:end].rstrip()


def fetch_option_help(binary: str) -> str | None:
    """Run ``<binary> --help`` and return its option block.

    Args:
        binary: Path or command name of the analysis tool.

    Returns:
        str | None: Option help, or ``None`` when it cannot be obtained.
    """

    if not binary:
        return None
    try:
        completed = run_command([binary, HELP_FLAG], timeout=PROBE_TIMEOUT_SECONDS)
    except OSError as exc:
        LOGGER.debug("help probe for %s failed: %s", binary, exc)
        return None
    return extract_option_help(completed.stdout)


__all__ = [
    "extract_option_help",
    "fetch_option_help",
    "probe_version",
]
