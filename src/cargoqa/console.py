# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for status lines and reports."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def get_console(*, color: bool, emoji: bool) -> Console:
    """Return the console for ``color``/``emoji``; colour needs a terminal."""

    return _console(color and detect_tty(), emoji)


@lru_cache(maxsize=None)
def _console(styled: bool, emoji: bool) -> Console:
    return Console(
        color_system="auto" if styled else None,
        force_terminal=styled,
        no_color=not styled,
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


__all__ = ["detect_tty", "get_console"]
