# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers for diagnostic and manifest findings."""

from __future__ import annotations

from .catalog import rule_reference
from .emitters import emit_report
from .formatters import diagnostic_finding, has_errors, location_reference, render_json, render_text

__all__ = [
    "diagnostic_finding",
    "emit_report",
    "has_errors",
    "location_reference",
    "render_json",
    "render_text",
    "rule_reference",
]
