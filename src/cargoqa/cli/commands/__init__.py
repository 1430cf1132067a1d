# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command registration for the cargo-qa CLI."""

from __future__ import annotations

import typer

from .code import code_command
from .manifest import manifest_command
from .runners import run_benchmarks, run_tests

_PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}


def register_commands(app: typer.Typer) -> None:
    """Attach every cargo-qa command to ``app``."""

    app.command("code")(code_command)
    app.command("manifest")(manifest_command)
    app.command("test", context_settings=_PASSTHROUGH)(run_tests)
    app.command("bench", context_settings=_PASSTHROUGH)(run_benchmarks)


__all__ = ["register_commands"]
