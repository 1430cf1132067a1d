# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from ..logging import configure_logging
from .commands import register_commands

app = typer.Typer(
    name="cargo-qa",
    help="Inspect cargo projects: filtered clippy diagnostics and manifest audits.",
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"cargo-qa {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging on stderr.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_print_version, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Configure logging before any command runs."""

    del version
    configure_logging(verbose=verbose)


register_commands(app)

__all__ = ["app"]
