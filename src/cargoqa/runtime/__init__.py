# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process collaborators that drive cargo."""

from __future__ import annotations

from .cargo import clippy_arguments, run_cargo, run_clippy, run_metadata, transient_lint_config
from .process import run_command

__all__ = [
    "clippy_arguments",
    "run_cargo",
    "run_clippy",
    "run_command",
    "run_metadata",
    "transient_lint_config",
]
