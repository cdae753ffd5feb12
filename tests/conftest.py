# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from cppcheck_runner.logging import shared_console


@pytest.fixture(autouse=True)
def fresh_shared_console() -> Iterator[None]:
    """Drop cached consoles so each test sees its own captured streams."""

    shared_console.cache_clear()
    yield
    shared_console.cache_clear()
