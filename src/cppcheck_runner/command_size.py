# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line length limits with list-file fallback."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Final

from .arguments import list_file_arguments, strip_include_flag
from .errors import ListFileError
from .subprocess_utils import run_command

LOGGER = logging.getLogger(__name__)

ARG_MAX_FLOOR: Final[int] = 32000
DEFAULT_MAX_COMMAND_LENGTH: Final[int] = 32767
GETCONF_TIMEOUT_SECONDS: Final[float] = 2.0
_FILE_LIST_PREFIX: Final[str] = "cppcheck-files-"
_INCLUDE_LIST_PREFIX: Final[str] = "cppcheck-includes-"
_LIST_SUFFIX: Final[str] = ".txt"


def probe_arg_max() -> int:
    """Return ``getconf ARG_MAX`` clamped to :data:`ARG_MAX_FLOOR`.

    Any probe failure falls back to the floor.
    """

    try:
        completed = run_command(["getconf", "ARG_MAX"], timeout=GETCONF_TIMEOUT_SECONDS)
    except OSError as exc:
        LOGGER.debug("getconf ARG_MAX unavailable: %s", exc)
        return ARG_MAX_FLOOR
    try:
        reported = int(completed.stdout.strip())
    except ValueError:
        LOGGER.debug("unexpected getconf ARG_MAX output: %r", completed.stdout)
        return ARG_MAX_FLOOR
    return max(reported, ARG_MAX_FLOOR)


@lru_cache(maxsize=1)
def max_command_length() -> int:
    """Return the platform command-line limit used to choose list files."""

    if sys.platform.startswith("linux"):
        return probe_arg_max()
    return DEFAULT_MAX_COMMAND_LENGTH


def joined_length(parts: Sequence[str]) -> int:
    """Return the length of ``parts`` joined by single spaces."""

    return len(" ".join(parts))


def _render_lines(entries: Sequence[str]) -> str:
    return "".join(f"{entry}\n" for entry in entries)


@dataclass(slots=True)
class ArgumentListFiles:
    """Own the two temporary files handed to ``--file-list`` and ``--includes-file``.

    Files are allocated on first use and rewritten only when the batch
    content changes.
    """

    directory: Path | None = None
    file_list: Path | None = field(default=None, init=False)
    include_list: Path | None = field(default=None, init=False)
    _contents: tuple[tuple[str, ...], tuple[str, ...]] | None = field(default=None, init=False)
    writes: int = field(default=0, init=False)

    def write(self, files: Sequence[str], include_flags: Sequence[str]) -> tuple[Path, Path]:
        """Materialise ``files`` and ``include_flags`` into the list files.

        Args:
            files: Batch file paths, one per line.
            include_flags: ``-I<path>`` flags; the prefix is stripped before writing.

        Returns:
            tuple[Path, Path]: Paths of the file list and include list.

        Raises:
            ListFileError: If either list file cannot be created or opened for writing.
        """

        contents = (tuple(files), tuple(strip_include_flag(flag) for flag in include_flags))
        file_list, include_list = self._ensure_allocated()
        if contents == self._contents:
            return file_list, include_list

        self._contents = None
        for path, entries in ((file_list, contents[0]), (include_list, contents[1])):
            try:
                with path.open("w", encoding="utf-8") as handle:
                    handle.write(_render_lines(entries))
            except OSError as exc:
                raise ListFileError(path, exc.strerror or str(exc)) from exc
        self._contents = contents
        self.writes += 1
        return file_list, include_list

    def _ensure_allocated(self) -> tuple[Path, Path]:
        if self.file_list is None:
            self.file_list = self._allocate(_FILE_LIST_PREFIX)
        if self.include_list is None:
            self.include_list = self._allocate(_INCLUDE_LIST_PREFIX)
        return self.file_list, self.include_list

    def _allocate(self, prefix: str) -> Path:
        try:
            handle, name = tempfile.mkstemp(prefix=prefix, suffix=_LIST_SUFFIX, dir=self.directory)
        except OSError as exc:
            raise ListFileError(None, exc.strerror or str(exc)) from exc
        os.close(handle)
        return Path(name)

    def close(self) -> None:
        """Remove the list files from disk."""

        for path in (self.file_list, self.include_list):
            if path is not None:
                path.unlink(missing_ok=True)
        self.file_list = None
        self.include_list = None
        self._contents = None


@dataclass(frozen=True, slots=True)
class Invocation:
    """Final argument vector for one dispatch."""

    arguments: tuple[str, ...]
    uses_list_files: bool


def fit_invocation(
    arguments: Sequence[str],
    files: Sequence[str],
    include_flags: Sequence[str],
    *,
    limit: int,
    list_files: ArgumentListFiles,
) -> Invocation:
    """Append files and includes inline, or via list files when too long.

    Args:
        arguments: Custom and static arguments preceding the batch.
        files: Batch file paths.
        include_flags: ``-I<path>`` flags for the batch.
        limit: Maximum command-line length for the platform.
        list_files: List-file owner used when the limit is reached.

    Returns:
        Invocation: Arguments ready to pass to the process.

    Raises:
        ListFileError: If the list files are needed but cannot be written.
    """

    total = joined_length(arguments) + joined_length(files) + joined_length(include_flags)
    if total < limit:
        return Invocation(arguments=(*arguments, *files, *include_flags), uses_list_files=False)

    LOGGER.debug("command length %d reaches limit %d; using list files", total, limit)
    file_list, include_list = list_files.write(files, include_flags)
    return Invocation(
        arguments=(*arguments, *list_file_arguments(file_list, include_list)),
        uses_list_files=True,
    )


__all__ = [
    "ARG_MAX_FLOOR",
    "DEFAULT_MAX_COMMAND_LENGTH",
    "ArgumentListFiles",
    "Invocation",
    "fit_invocation",
    "joined_length",
    "max_command_length",
    "probe_arg_max",
]
