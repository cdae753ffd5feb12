# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ignore-pattern file selection."""

from __future__ import annotations

from pathlib import Path

from cppcheck_runner.selection import is_ignored, select_files


def test_patterns_match_full_path_or_name() -> None:
    assert is_ignored("build/gen/a.cpp", ["build/*"])
    assert is_ignored(Path("src/moc_widget.cpp"), ["moc_*.cpp"])
    assert not is_ignored("src/widget.cpp", ["moc_*.cpp"])


def test_select_files_preserves_order_and_skips_blank_patterns() -> None:
    paths = ["src/b.cpp", "third_party/x.c", Path("src/a.cpp")]

    assert select_files(paths, ["third_party/*", " "]) == ["src/b.cpp", "src/a.cpp"]


def test_no_patterns_keeps_everything() -> None:
    assert select_files(["a.c", "b.c"], ()) == ["a.c", "b.c"]
