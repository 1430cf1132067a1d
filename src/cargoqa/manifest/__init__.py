# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Manifest completeness and dependency staleness checks."""

from __future__ import annotations

from .completeness import check_package
from .parsing import ManifestError, parse_manifest
from .pipeline import ManifestPipeline
from .staleness import InvalidSourceError, branch_parameters, check_consistency, evaluate_dependency

__all__ = [
    "InvalidSourceError",
    "ManifestError",
    "ManifestPipeline",
    "branch_parameters",
    "check_consistency",
    "check_package",
    "evaluate_dependency",
    "parse_manifest",
]
