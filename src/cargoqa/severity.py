# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Display classes that collapse the linter's level vocabulary."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    OTHER = "other"


_LEVEL_TO_SEVERITY: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "error: internal compiler error": Severity.ERROR,
    "warning": Severity.WARNING,
}


def severity_from_level(level: str | None) -> Severity:
    """Map a raw linter level (``warning``, ``note``, ...) onto a display class.

    Args:
        level: Level string reported by the linter; matching is case-insensitive.

    Returns:
        Severity: ``ERROR`` or ``WARNING`` for the known levels, ``OTHER`` otherwise.
    """

    if not level:
        return Severity.OTHER
    return _LEVEL_TO_SEVERITY.get(level.strip().lower(), Severity.OTHER)


def severity_color(severity: Severity) -> str:
    """Return the rich colour name associated with a severity class."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.INFO: "default",
        Severity.OTHER: "default",
    }.get(severity, "default")


__all__ = ["Severity", "severity_color", "severity_from_level"]
