# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pass-through ``cargo test`` and ``cargo bench`` runners."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...console import detect_tty
from ...logging import fail
from ...runtime import run_cargo
from ..shared import ColorOption, EmojiOption, RootOption

ExtraArgs = Annotated[list[str] | None, typer.Argument(help="Arguments forwarded to cargo.")]


def _run(root: Path, subcommand: str, args: list[str] | None, *, color: bool, emoji: bool) -> None:
    try:
        status = run_cargo(root.resolve(), subcommand, args or [])
    except FileNotFoundError as exc:
        fail(str(exc), use_emoji=emoji, use_color=color and detect_tty())
        raise typer.Exit(code=2) from exc
    raise typer.Exit(code=status)


def run_tests(
    root: RootOption = Path("."),
    args: ExtraArgs = None,
    color: ColorOption = True,
    emoji: EmojiOption = True,
) -> None:
    """Run the project's tests via cargo."""

    _run(root, "test", args, color=color, emoji=emoji)


def run_benchmarks(
    root: RootOption = Path("."),
    args: ExtraArgs = None,
    color: ColorOption = True,
    emoji: EmojiOption = True,
) -> None:
    """Run the project's benchmarks via cargo."""

    _run(root, "bench", args, color=color, emoji=emoji)


__all__ = ["run_benchmarks", "run_tests"]
