# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic ingestion, suppression and ordering."""

from __future__ import annotations

from .ordering import sort_diagnostics
from .parsing import LineResult, ParsedStream, UnparsedLine, parse_line, parse_stream
from .pipeline import DiagnosticPipeline
from .suppression import filter_diagnostics, is_suppressed

__all__ = [
    "DiagnosticPipeline",
    "LineResult",
    "ParsedStream",
    "UnparsedLine",
    "filter_diagnostics",
    "is_suppressed",
    "parse_line",
    "parse_stream",
    "sort_diagnostics",
]
