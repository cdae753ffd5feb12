# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for static argument construction."""

from __future__ import annotations

from cppcheck_runner.arguments import (
    DEFAULT_ENABLE_FLAG,
    TEMPLATE_FLAG,
    build_run_arguments,
    custom_arguments,
    find_enable_override,
    include_arguments,
    list_file_arguments,
    render_command,
    strip_include_flag,
)
from cppcheck_runner.settings import RunnerSettings


def test_defaults_use_jobs_enable_and_template() -> None:
    arguments = build_run_arguments(RunnerSettings(), thread_count=8)

    assert arguments == ["-j", "8", DEFAULT_ENABLE_FLAG, TEMPLATE_FLAG]


def test_unused_check_disables_jobs_and_extends_enable() -> None:
    arguments = build_run_arguments(RunnerSettings(check_unused=True), thread_count=8)

    assert "-j" not in arguments
    assert arguments[0] == f"{DEFAULT_ENABLE_FLAG},unusedFunction"
    assert arguments[-1] == TEMPLATE_FLAG


def test_inconclusive_flag_sits_between_enable_and_template() -> None:
    arguments = build_run_arguments(RunnerSettings(check_inconclusive=True), thread_count=2)

    assert arguments[-3:] == [DEFAULT_ENABLE_FLAG, "--inconclusive", TEMPLATE_FLAG]


def test_enable_override_from_custom_parameters() -> None:
    settings = RunnerSettings(custom_parameters="--std=c11 --enable=style --enable=all", check_unused=True)

    assert find_enable_override(settings.custom_parameters) == "--enable=all"
    assert build_run_arguments(settings)[0] == "--enable=all,unusedFunction"


def test_expanded_custom_parameters_take_precedence_for_enable_override() -> None:
    settings = RunnerSettings(custom_parameters="%{Checks}")

    assert DEFAULT_ENABLE_FLAG in build_run_arguments(settings, thread_count=1)
    arguments = build_run_arguments(settings, thread_count=1, custom_parameters="--enable=style")
    assert arguments == ["-j", "1", "--enable=style", TEMPLATE_FLAG]


def test_zero_thread_count_is_clamped() -> None:
    assert build_run_arguments(RunnerSettings(), thread_count=0)[:2] == ["-j", "1"]


def test_custom_arguments_drop_enable_tokens() -> None:
    assert custom_arguments("  --std=c++17   --enable=all -DFOO ") == ["--std=c++17", "-DFOO"]
    assert custom_arguments("") == []


def test_include_helpers() -> None:
    flags = include_arguments(["/usr/include", "src"])

    assert flags == ["-I/usr/include", "-Isrc"]
    assert [strip_include_flag(flag) for flag in flags] == ["/usr/include", "src"]


def test_list_file_arguments_and_rendering() -> None:
    assert list_file_arguments("/tmp/f.txt", "/tmp/i.txt") == [
        "--file-list=/tmp/f.txt",
        "--includes-file=/tmp/i.txt",
    ]
    assert render_command("cppcheck", ["-j", "2", "a.c"]) == "cppcheck -j 2 a.c"
