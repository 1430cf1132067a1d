# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deterministic display order for diagnostics."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import Diagnostic

type LocationKey = tuple[int, str, int, int]


def location_key(diagnostic: Diagnostic) -> LocationKey:
    """Return the sort key ``(unlocated, file, line, column)`` for ``diagnostic``.

    Location-less diagnostics sort after every located one.
    """

    span = diagnostic.primary_location
    if span is None:
        return (1, "", 0, 0)
    return (0, span.file_path, span.line_start, span.column_start)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Return ``diagnostics`` ordered by file, line and column.

    ``sorted`` is stable, so exact ties keep their input order.
    """

    return sorted(diagnostics, key=location_key)


__all__ = ["location_key", "sort_diagnostics"]
