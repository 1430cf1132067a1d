# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write rendered findings to the terminal."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.text import Text

from ..config import OutputConfig
from ..console import get_console
from ..logging import emoji
from ..models import Finding
from ..severity import Severity, severity_color
from .formatters import has_errors, render_json, render_text, severity_counts

_SUMMARY_ORDER = (Severity.ERROR, Severity.WARNING, Severity.OTHER)


def emit_report(
    findings: Sequence[Finding],
    cfg: OutputConfig,
    *,
    cwd: Path | None = None,
    console: Console | None = None,
) -> None:
    """Print ``findings`` in the configured format.

    Args:
        findings: Ordered findings produced by a pipeline.
        cfg: Output settings selecting format, colour, emoji and hyperlinks.
        cwd: Directory used to build location references; defaults to the CWD.
        console: Console to write to; defaults to the shared console manager.
    """

    target = console or get_console(color=cfg.color, emoji=cfg.emoji)
    if cfg.format == "json":
        target.print(render_json(findings), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return
    for line in render_text(findings, cfg, cwd or Path.cwd()):
        target.print(line, soft_wrap=True)
    target.print(summary_line(findings, cfg), soft_wrap=True)


def summary_line(findings: Sequence[Finding], cfg: OutputConfig) -> Text:
    """Return the closing line with per-severity counts."""

    counts = severity_counts(findings)
    failed = has_errors(findings)
    symbol = emoji("❌ " if failed else "✅ ", cfg.emoji)
    text = Text(symbol)
    text.append("Failed" if failed else "Passed", style="red" if failed else "green")
    parts = [
        (f"{counts[severity]} {severity.value}(s)", severity_color(severity))
        for severity in _SUMMARY_ORDER
        if counts.get(severity)
    ]
    if not parts:
        text.append(" — no issues found")
        return text
    text.append(" — ")
    for index, (label, style) in enumerate(parts):
        if index:
            text.append(", ")
        text.append(label, style=style)
    return text


__all__ = ["emit_report", "summary_line"]
