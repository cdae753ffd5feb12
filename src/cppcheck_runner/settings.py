# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runner configuration snapshot and TOML loading helpers."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import SettingsError
from .models import CheckTrigger

LOGGER = logging.getLogger(__name__)

CONFIG_KEY: Final[str] = "cppcheck-runner"
ERROR_SEVERITY: Final[str] = "e"
WARNING_SEVERITY: Final[str] = "w"
STANDALONE_CONFIG_NAME: Final[str] = ".cppcheck-runner.toml"
PYPROJECT_NAME: Final[str] = "pyproject.toml"


class RunnerSettings(BaseModel):
    """Immutable configuration snapshot consulted for each analysis run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    binary_file: str = ""
    check_on_build: bool = True
    check_on_save: bool = True
    check_on_project_change: bool = False
    check_on_file_add: bool = False
    check_unused: bool = False
    check_inconclusive: bool = False
    custom_parameters: str = ""
    ignore_patterns: tuple[str, ...] = ()
    ignore_include_paths: bool = False
    show_binary_output: bool = False
    show_id: bool = False
    popup_on_error: bool = True
    popup_on_warning: bool = True

    @field_validator("ignore_patterns", mode="before")
    @classmethod
    def _split_patterns(cls, value: object) -> object:
        """Accept the comma separated form used by the settings form.

        Args:
            value: Raw configuration value for ``ignore_patterns``.

        Returns:
            object: Sequence of trimmed, non-empty patterns or the untouched value.
        """

        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    def checks_on(self, trigger: CheckTrigger) -> bool:
        """Return ``True`` when ``trigger`` should queue a check."""

        return {
            CheckTrigger.BUILD: self.check_on_build,
            CheckTrigger.SAVE: self.check_on_save,
            CheckTrigger.PROJECT_CHANGE: self.check_on_project_change,
            CheckTrigger.FILE_ADD: self.check_on_file_add,
        }[trigger]

    def popup_for(self, severity: str) -> bool:
        """Return ``True`` when a diagnostic of ``severity`` should draw the user's attention."""

        if severity == ERROR_SEVERITY:
            return self.popup_on_error
        if severity == WARNING_SEVERITY:
            return self.popup_on_warning
        return False

    def with_overrides(self, **overrides: Any) -> RunnerSettings:
        """Return a validated copy of the settings with ``overrides`` applied.

        Args:
            **overrides: Field values replacing the current ones. ``None`` values are ignored.

        Returns:
            RunnerSettings: New snapshot reflecting the overrides.

        Raises:
            SettingsError: If an override has an invalid name or value.
        """

        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return _validate(payload, source="overrides")


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def _validate(data: Mapping[str, Any], *, source: str) -> RunnerSettings:
    try:
        return RunnerSettings.model_validate(_normalise_keys(data))
    except ValidationError as exc:
        raise SettingsError(f"invalid settings in {source}: {exc}") from exc


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"failed to parse {path}: {exc}") from exc
    except OSError as exc:
        raise SettingsError(f"failed to read {path}: {exc}") from exc


def load_settings(root: Path) -> RunnerSettings:
    """Load settings for ``root``.

    ``.cppcheck-runner.toml`` takes precedence over the
    ``[tool.cppcheck-runner]`` table of ``pyproject.toml``. Defaults apply
    when neither source exists.

    Args:
        root: Project directory holding the configuration files.

    Returns:
        RunnerSettings: Validated configuration snapshot.

    Raises:
        SettingsError: If a configuration file is unreadable or invalid.
    """

    standalone = root / STANDALONE_CONFIG_NAME
    if standalone.is_file():
        LOGGER.debug("loading settings from %s", standalone)
        return _validate(_read_toml(standalone), source=str(standalone))

    pyproject = root / PYPROJECT_NAME
    if pyproject.is_file():
        section = _read_toml(pyproject).get("tool", {}).get(CONFIG_KEY)
        if isinstance(section, Mapping):
            LOGGER.debug("loading settings from %s [tool.%s]", pyproject, CONFIG_KEY)
            return _validate(section, source=f"{pyproject} [tool.{CONFIG_KEY}]")
        if section is not None:
            raise SettingsError(f"[tool.{CONFIG_KEY}] in {pyproject} must be a table")

    return RunnerSettings()


__all__ = [
    "CONFIG_KEY",
    "RunnerSettings",
    "load_settings",
]
