# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests driving a scripted stand-in for cppcheck."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cppcheck_runner.cli import probe
from cppcheck_runner.cli.app import app

FAKE_CPPCHECK = """
import sys

files = [arg for arg in sys.argv[1:] if arg.endswith(".cpp")]
for index, name in enumerate(files, 1):
    print(f"{index}/{len(files)} files checked {index * 100 // len(files)}% done", flush=True)
    if "bad" in name:
        print(f"{name},3,error,nullPointer,Null pointer dereference", file=sys.stderr)
    else:
        print(f"{name},1,style,unusedVariable,Unused variable: x", file=sys.stderr)
"""

ENV = {"COLUMNS": "200"}


@pytest.fixture
def fake_cppcheck(tmp_path: Path) -> Path:
    script = tmp_path / "fake_cppcheck.py"
    script.write_text(FAKE_CPPCHECK, encoding="utf-8")
    return script


def _check_args(root: Path, script: Path, *files: str) -> list[str]:
    return ["check", *files, "--root", str(root), "--binary", sys.executable, "--params", str(script), "--no-color"]


def test_check_reports_errors_with_exit_code_one(tmp_path: Path, fake_cppcheck: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, [*_check_args(tmp_path, fake_cppcheck, "bad.cpp", "good.cpp"), "--show-id"], env=ENV)

    assert result.exit_code == 1, result.output
    assert "Null pointer dereference" in result.output
    assert "nullPointer" in result.output
    assert "bad.cpp:3" in result.output
    assert "2 diagnostic(s) reported, including errors" in result.output


def test_check_with_style_findings_succeeds(tmp_path: Path, fake_cppcheck: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, _check_args(tmp_path, fake_cppcheck, "good.cpp"), env=ENV)

    assert result.exit_code == 0, result.output
    assert "Unused variable: x" in result.output
    assert "unusedVariable" not in result.output
    assert "1 diagnostic(s) reported" in result.output


def test_check_without_findings(tmp_path: Path, fake_cppcheck: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, _check_args(tmp_path, fake_cppcheck, "plain.c"), env=ENV)

    assert result.exit_code == 0, result.output
    assert "No issues found" in result.output


def test_check_skips_ignored_files(tmp_path: Path, fake_cppcheck: Path) -> None:
    (tmp_path / ".cppcheck-runner.toml").write_text('ignore_patterns = "bad*"\n', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, _check_args(tmp_path, fake_cppcheck, "bad.cpp", "good.cpp"), env=ENV)

    assert result.exit_code == 0, result.output
    assert "Null pointer dereference" not in result.output

    result = runner.invoke(app, _check_args(tmp_path, fake_cppcheck, "bad.cpp"), env=ENV)
    assert result.exit_code == 0
    assert "nothing to check" in result.output


def test_check_unknown_binary_is_a_configuration_error(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["check", "a.cpp", "--root", str(tmp_path), "--binary", "no-such-cppcheck-binary-xyz", "--no-color"],
        env=ENV,
    )

    assert result.exit_code == 2
    assert "was not found on PATH" in result.output


def test_check_reports_failed_start(tmp_path: Path) -> None:
    runner = CliRunner()
    missing = tmp_path / "bin" / "cppcheck"

    result = runner.invoke(
        app,
        ["check", "a.cpp", "--root", str(tmp_path), "--binary", str(missing), "--no-color"],
        env=ENV,
    )

    assert result.exit_code == 2
    assert "Failed to start" in result.output


def test_check_rejects_invalid_configuration(tmp_path: Path) -> None:
    (tmp_path / ".cppcheck-runner.toml").write_text("show_id = 'maybe'\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["check", "a.cpp", "--root", str(tmp_path), "--no-color"], env=ENV)

    assert result.exit_code == 2
    assert "invalid settings" in result.output


def test_config_show_outputs_json(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[tool.cppcheck-runner]
binary-file = "/opt/cppcheck/bin/cppcheck"
check-unused = true
""".strip(),
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["config", "show", "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["binary_file"] == "/opt/cppcheck/bin/cppcheck"
    assert payload["check_unused"] is True
    assert payload["ignore_patterns"] == []


def test_version_and_options_use_probes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []

    def fake_version(binary: str) -> str:
        seen.append(binary)
        return "Cppcheck 2.14.1"

    monkeypatch.setattr(probe, "probe_version", fake_version)
    monkeypatch.setattr(probe, "fetch_option_help", lambda binary: None)
    runner = CliRunner()

    result = runner.invoke(app, ["version", "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert result.output.strip() == "Cppcheck 2.14.1"
    assert seen == ["cppcheck"]

    result = runner.invoke(app, ["options", "--binary", "/opt/cppcheck", "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert "Could not read the option help of /opt/cppcheck" in result.output
