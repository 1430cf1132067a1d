# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``cargo-qa code``: filtered, ordered clippy diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...diagnostics import DiagnosticPipeline
from ...reporting import emit_report, has_errors
from ...runtime import run_clippy
from ..shared import (
    ColorOption,
    ConfigOption,
    EmojiOption,
    FormatOption,
    HyperlinkOption,
    OutputFormat,
    RootOption,
    load_settings,
)

InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Read a recorded JSON-lines diagnostic stream instead of running clippy.",
        dir_okay=False,
        exists=True,
    ),
]


def code_command(
    root: RootOption = Path("."),
    input_file: InputOption = None,
    config_file: ConfigOption = None,
    output_format: FormatOption = OutputFormat.TEXT,
    color: ColorOption = True,
    emoji: EmojiOption = True,
    hyperlinks: HyperlinkOption = True,
) -> None:
    """Analyse code for known issues via clippy."""

    settings = load_settings(
        root=root,
        config_file=config_file,
        output_format=output_format,
        color=color,
        emoji=emoji,
        hyperlinks=hyperlinks,
    )
    if input_file is not None:
        lines = input_file.read_text(encoding="utf-8", errors="replace").splitlines()
    else:
        settings.status("Analysing code via clippy...")
        try:
            lines = run_clippy(settings.root, settings.config.lint)
        except FileNotFoundError as exc:
            raise settings.abort(str(exc)) from exc

    findings = DiagnosticPipeline(settings.config.suppression).run(lines)
    emit_report(findings, settings.config.output, cwd=settings.root)
    if has_errors(findings):
        raise typer.Exit(code=1)


__all__ = ["code_command"]
