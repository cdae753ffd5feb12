# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Message sinks receiving log text and user-visible errors from the runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

from rich.console import Console

from .logging import fail, info, plain


class MessageLevel(str, Enum):
    """How prominently a message should be surfaced by the host."""

    SILENT = "silent"
    FOCUS = "focus"
    ERROR = "error"


@runtime_checkable
class MessageSink(Protocol):
    """Destination for textual runner output."""

    def write(self, text: str, *, level: MessageLevel = MessageLevel.SILENT) -> None:
        """Record ``text`` at ``level``."""

        raise NotImplementedError


@dataclass(slots=True)
class ConsoleMessageSink:
    """Write runner messages to a Rich console."""

    use_emoji: bool = True
    use_color: bool | None = None
    console: Console | None = None

    def write(self, text: str, *, level: MessageLevel = MessageLevel.SILENT) -> None:
        """Render ``text`` using the style associated with ``level``."""

        if level is MessageLevel.ERROR:
            fail(text, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)
        elif level is MessageLevel.FOCUS:
            info(text, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)
        else:
            plain(text, use_color=self.use_color, console=self.console)


@dataclass(slots=True)
class MemoryMessageSink:
    """Collect messages in memory for embedding hosts."""

    messages: list[tuple[MessageLevel, str]] = field(default_factory=list)

    def write(self, text: str, *, level: MessageLevel = MessageLevel.SILENT) -> None:
        """Append ``text`` to :attr:`messages`."""

        self.messages.append((level, text))

    def texts(self, level: MessageLevel | None = None) -> list[str]:
        """Return recorded texts, optionally filtered by ``level``."""

        return [text for entry_level, text in self.messages if level is None or entry_level is level]


__all__ = [
    "ConsoleMessageSink",
    "MemoryMessageSink",
    "MessageLevel",
    "MessageSink",
]
