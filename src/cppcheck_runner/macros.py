# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Variable expansion for user supplied custom parameters."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

_MACRO_PATTERN: Final[re.Pattern[str]] = re.compile(r"%\{(?P<name>[^{}]+)\}")
_ENV_PREFIX: Final[str] = "Env:"


@runtime_checkable
class MacroExpander(Protocol):
    """Resolve host variables embedded in a parameter string."""

    def expand(self, text: str) -> str:
        """Return ``text`` with every known variable substituted."""

        raise NotImplementedError


@dataclass(slots=True)
class VariableMacroExpander:
    """Expand ``%{Name}`` from a mapping and ``%{Env:NAME}`` from the environment.

    Unknown variables are left in place so the tool reports them verbatim.
    """

    variables: Mapping[str, str] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)

    def expand(self, text: str) -> str:
        """Return ``text`` with known ``%{...}`` references substituted.

        Args:
            text: Raw parameter string.

        Returns:
            str: Expanded parameter string.
        """

        return _MACRO_PATTERN.sub(self._replace, text)

    def _replace(self, match: re.Match[str]) -> str:
        name = match.group("name")
        if name.startswith(_ENV_PREFIX):
            value = self.environ.get(name.removeprefix(_ENV_PREFIX))
        else:
            value = self.variables.get(name)
        return match.group(0) if value is None else value


def split_parameters(text: str) -> list[str]:
    """Split an expanded parameter string on whitespace, dropping empty parts."""

    return text.split()


__all__ = [
    "MacroExpander",
    "VariableMacroExpander",
    "split_parameters",
]
