# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static cppcheck argument construction from a settings snapshot."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from typing import Final

from .macros import split_parameters
from .settings import RunnerSettings

ENABLE_FLAG_PREFIX: Final[str] = "--enable"
DEFAULT_ENABLE_FLAG: Final[str] = "--enable=warning,style,performance,portability,information,missingInclude"
UNUSED_FUNCTION_CHECK: Final[str] = "unusedFunction"
INCONCLUSIVE_FLAG: Final[str] = "--inconclusive"
JOBS_FLAG: Final[str] = "-j"
TEMPLATE_FLAG: Final[str] = "--template={file},{line},{severity},{id},{message}"
INCLUDE_FLAG_PREFIX: Final[str] = "-I"
FILE_LIST_FLAG: Final[str] = "--file-list"
INCLUDES_FILE_FLAG: Final[str] = "--includes-file"
VERSION_FLAG: Final[str] = "--version"
HELP_FLAG: Final[str] = "--help"


def ideal_thread_count() -> int:
    """Return the hardware concurrency available to the analysis tool."""

    return max(1, os.cpu_count() or 1)


def is_enable_flag(argument: str) -> bool:
    """Return ``True`` when ``argument`` selects the enabled check categories."""

    return argument.startswith(ENABLE_FLAG_PREFIX)


def find_enable_override(custom_parameters: str) -> str | None:
    """Return the last ``--enable`` token in a custom parameter string.

    Args:
        custom_parameters: Custom parameter string, raw or macro-expanded.

    Returns:
        str | None: Enable flag supplied by the user, or ``None`` when absent.
    """

    for token in reversed(split_parameters(custom_parameters)):
        if is_enable_flag(token):
            return token
    return None


def build_run_arguments(
    settings: RunnerSettings,
    *,
    thread_count: int | None = None,
    custom_parameters: str | None = None,
) -> list[str]:
    """Build the reusable static flags passed to every analysis run.

    A ``--enable`` token in the custom parameters replaces the default
    category set. Unused-function detection needs whole-program analysis, so
    it disables the ``-j`` flag.

    Args:
        settings: Configuration snapshot.
        thread_count: Parallelism override; defaults to :func:`ideal_thread_count`.
        custom_parameters: Macro-expanded custom parameters searched for the
            enable override; the raw settings value by default.

    Returns:
        list[str]: Ordered static arguments.
    """

    arguments: list[str] = []
    if custom_parameters is None:
        custom_parameters = settings.custom_parameters
    enabled = find_enable_override(custom_parameters) or DEFAULT_ENABLE_FLAG
    if settings.check_unused:
        enabled = f"{enabled},{UNUSED_FUNCTION_CHECK}"
    else:
        jobs = thread_count if thread_count is not None else ideal_thread_count()
        arguments.extend((JOBS_FLAG, str(max(1, jobs))))
    arguments.append(enabled)
    if settings.check_inconclusive:
        arguments.append(INCONCLUSIVE_FLAG)
    arguments.append(TEMPLATE_FLAG)
    return arguments


def custom_arguments(expanded: str) -> list[str]:
    """Split expanded custom parameters, dropping ``--enable`` tokens.

    The enable flag is folded into :func:`build_run_arguments`, so it must not
    be passed a second time.

    Args:
        expanded: Custom parameter string after macro expansion.

    Returns:
        list[str]: Arguments placed ahead of the static flags.
    """

    return [token for token in split_parameters(expanded) if not is_enable_flag(token)]


def include_arguments(paths: Iterable[str]) -> list[str]:
    """Return ``-I<path>`` flags for each include path."""

    return [f"{INCLUDE_FLAG_PREFIX}{path}" for path in paths]


def strip_include_flag(argument: str) -> str:
    """Return the bare path of a ``-I<path>`` flag."""

    return argument.removeprefix(INCLUDE_FLAG_PREFIX)


def list_file_arguments(file_list: os.PathLike[str] | str, includes_file: os.PathLike[str] | str) -> list[str]:
    """Return the flags pointing the tool at generated list files."""

    return [f"{FILE_LIST_FLAG}={os.fspath(file_list)}", f"{INCLUDES_FILE_FLAG}={os.fspath(includes_file)}"]


def render_command(binary: str, arguments: Sequence[str]) -> str:
    """Return a single-space rendering of a command for log output."""

    return " ".join((binary, *arguments))


__all__ = [
    "DEFAULT_ENABLE_FLAG",
    "HELP_FLAG",
    "TEMPLATE_FLAG",
    "VERSION_FLAG",
    "build_run_arguments",
    "custom_arguments",
    "find_enable_override",
    "ideal_thread_count",
    "include_arguments",
    "list_file_arguments",
    "render_command",
    "strip_include_flag",
]
