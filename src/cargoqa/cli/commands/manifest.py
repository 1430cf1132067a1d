# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``cargo-qa manifest``: missing fields and stale pinned dependencies."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...manifest import ManifestPipeline
from ...reporting import emit_report, has_errors
from ...runtime import run_metadata
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
        help="Read a recorded `cargo metadata` document instead of running cargo.",
        dir_okay=False,
        exists=True,
    ),
]


def manifest_command(
    root: RootOption = Path("."),
    input_file: InputOption = None,
    config_file: ConfigOption = None,
    output_format: FormatOption = OutputFormat.TEXT,
    color: ColorOption = True,
    emoji: EmojiOption = True,
    hyperlinks: HyperlinkOption = True,
) -> None:
    """Analyse the manifest for known issues via cargo metadata."""

    settings = load_settings(
        root=root,
        config_file=config_file,
        output_format=output_format,
        color=color,
        emoji=emoji,
        hyperlinks=hyperlinks,
    )
    if input_file is not None:
        document = input_file.read_text(encoding="utf-8", errors="replace")
    else:
        settings.status("Analysing manifest via metadata...")
        try:
            document = run_metadata(settings.root)
        except FileNotFoundError as exc:
            raise settings.abort(str(exc)) from exc

    findings = ManifestPipeline(settings.config.manifest).run(document)
    emit_report(findings, settings.config.output, cwd=settings.root)
    if has_errors(findings):
        raise typer.Exit(code=1)


__all__ = ["manifest_command"]
