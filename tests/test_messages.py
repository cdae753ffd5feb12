# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for message sinks and console helpers."""

from __future__ import annotations

import io

from rich.console import Console

from cppcheck_runner.logging import emoji, info, shared_console, warn
from cppcheck_runner.messages import ConsoleMessageSink, MemoryMessageSink, MessageLevel, MessageSink


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, force_terminal=False, width=120), buffer


def test_memory_sink_filters_by_level() -> None:
    sink = MemoryMessageSink()
    sink.write("started")
    sink.write("boom", level=MessageLevel.ERROR)

    assert isinstance(sink, MessageSink)
    assert sink.texts() == ["started", "boom"]
    assert sink.texts(MessageLevel.ERROR) == ["boom"]
    assert sink.texts(MessageLevel.FOCUS) == []


def test_console_sink_decorates_by_level() -> None:
    console, buffer = _console()
    sink = ConsoleMessageSink(use_emoji=True, use_color=False, console=console)

    sink.write("raw line")
    sink.write("Starting cppcheck", level=MessageLevel.FOCUS)
    sink.write("Failed to write", level=MessageLevel.ERROR)

    lines = buffer.getvalue().splitlines()
    assert lines[0] == "raw line"
    assert lines[1].endswith("Starting cppcheck")
    assert lines[1].startswith("ℹ")
    assert lines[2].startswith("❌")


def test_helpers_respect_emoji_preference() -> None:
    console, buffer = _console()

    warn("careful", use_emoji=False, use_color=False, console=console)

    assert buffer.getvalue() == "careful\n"
    assert emoji("✅", False) == ""


def test_helpers_fall_back_to_shared_console(capsys) -> None:
    info("hello", use_emoji=False, use_color=False)

    assert capsys.readouterr().out == "hello\n"
    assert shared_console(False, False) is shared_console(False, False)
    assert shared_console(False, False) is not shared_console(True, False)
