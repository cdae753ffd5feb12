# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filter candidate files against the configured ignore patterns."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from fnmatch import fnmatch
from pathlib import Path, PurePath


def is_ignored(path: str | Path, patterns: Sequence[str]) -> bool:
    """Return ``True`` when ``path`` matches any of ``patterns``.

    Patterns are tried against the POSIX form of the whole path and against
    the file name alone.
    """

    pure = PurePath(path)
    candidates = (pure.as_posix(), pure.name)
    return any(fnmatch(candidate, pattern) for pattern in patterns if pattern for candidate in candidates)


def select_files(paths: Iterable[str | Path], ignore_patterns: Sequence[str]) -> list[str]:
    """Return ``paths`` as strings without the entries matched by ``ignore_patterns``.

    Args:
        paths: Candidate files in caller order.
        ignore_patterns: Glob patterns; blank entries are skipped.

    Returns:
        list[str]: Retained paths, preserving their order.
    """

    patterns = [pattern.strip() for pattern in ignore_patterns if pattern.strip()]
    return [str(path) for path in paths if not patterns or not is_ignored(path, patterns)]


__all__ = ["is_ignored", "select_files"]
