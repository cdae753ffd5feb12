# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering progress and diagnostic line parsing."""

from __future__ import annotations

import pytest

from cppcheck_runner.models import CheckDiagnostic, ProgressUpdate
from cppcheck_runner.parsers import (
    OutputParser,
    decode_line,
    normalize_separators,
    parse_diagnostic,
    parse_progress,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("1/3 files checked 42% done", 42),
        ("3/3 files checked 100% done", 100),
        ("1/3 files checked garbage% done", None),
        ("1/3 files checked 142% done", None),
        ("Checking foo.cpp ...", None),
        ("% done", None),
    ],
)
def test_parse_progress(line: str, expected: int | None) -> None:
    assert parse_progress(line) == expected


def test_parse_diagnostic_without_id() -> None:
    diagnostic = parse_diagnostic("src/a.cpp,12,error,nullPointer,Null pointer dereference", show_id=False)

    assert diagnostic == CheckDiagnostic(
        severity="e",
        message="Null pointer dereference",
        file="src/a.cpp",
        line=12,
    )
    assert diagnostic is not None and diagnostic.is_error


def test_parse_diagnostic_with_id() -> None:
    diagnostic = parse_diagnostic("a.cpp,7,warning,uninitvar,Uninitialized variable: x", show_id=True)

    assert diagnostic is not None
    assert diagnostic.code == "uninitvar"
    assert diagnostic.severity == "w"
    assert not diagnostic.is_error


def test_message_keeps_embedded_commas() -> None:
    diagnostic = parse_diagnostic("a.cpp,3,style,id,Consider a, b, and c", show_id=False)

    assert diagnostic is not None
    assert diagnostic.message == "Consider a, b, and c"


def test_message_uses_first_occurrence_of_its_text() -> None:
    diagnostic = parse_diagnostic("x,1,style,x,x", show_id=False)

    assert diagnostic is not None
    assert diagnostic.message == "x,1,style,x,x"


@pytest.mark.parametrize(
    "line",
    ["a.cpp,3,error", "a.cpp,3,,id,message", "just some text"],
)
def test_malformed_lines_are_discarded(line: str) -> None:
    assert parse_diagnostic(line, show_id=True) is None


def test_non_numeric_line_becomes_zero() -> None:
    diagnostic = parse_diagnostic("nofile,,information,missingInclude,Include not found", show_id=False)

    assert diagnostic is not None
    assert diagnostic.line == 0
    assert diagnostic.severity == "i"


def test_native_separators_are_normalised() -> None:
    diagnostic = parse_diagnostic(r"src\a.cpp,5,error,id,boom", show_id=False, sep="\\")

    assert diagnostic is not None
    assert diagnostic.file == "src/a.cpp"
    assert normalize_separators("src/a.cpp", sep="/") == "src/a.cpp"


def test_decode_line_strips_and_replaces_invalid_bytes() -> None:
    assert decode_line(b"  text\r\n") == "text"
    assert decode_line(b"bad \xff byte\n") == "bad � byte"


def test_output_parser_dispatches_by_stream() -> None:
    parser = OutputParser(show_id=True)

    assert parser.parse_stdout(b"2/4 files checked 50% done\n") == ProgressUpdate(50)
    assert parser.parse_stdout(b"Checking a.cpp ...\n") is None
    assert parser.parse_stderr(b"\n") is None
    diagnostic = parser.parse_stderr(b"a.cpp,1,performance,passedByValue,Pass by reference\n")
    assert diagnostic is not None
    assert diagnostic.code == "passedByValue"
