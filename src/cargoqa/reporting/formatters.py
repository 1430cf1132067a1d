# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide what each report line shows and in what shape.

Findings are turned into :class:`rich.text.Text` lines here; writing them to a
terminal (and thereby emitting colour or hyperlink escape sequences) is left to
:mod:`cargoqa.reporting.emitters`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from rich.style import Style
from rich.text import Text

from ..config import OutputConfig
from ..models import Diagnostic, Finding, FindingKind, SourceSpan
from ..severity import Severity, severity_color
from .catalog import rule_reference

HELP_LEVEL: Final[str] = "help"
FURTHER_INFORMATION_PREFIX: Final[str] = "for further information"
LOCATION_STYLE: Final[str] = "cyan"
CODE_STYLE: Final[str] = "default"


@dataclass(slots=True, frozen=True)
class LocationReference:
    """Clickable reference to a source position."""

    text: str
    url: str


def help_hints(diagnostic: Diagnostic) -> tuple[str, ...]:
    """Return the actionable ``help`` annotations, dropping documentation boilerplate."""

    return tuple(
        annotation.summary
        for annotation in diagnostic.annotations
        if annotation.level == HELP_LEVEL and not annotation.summary.startswith(FURTHER_INFORMATION_PREFIX)
    )


def diagnostic_finding(diagnostic: Diagnostic) -> Finding:
    """Return the report entry for a retained diagnostic."""

    return Finding(
        kind=FindingKind.DIAGNOSTIC,
        severity=diagnostic.severity,
        label=diagnostic.level,
        message=diagnostic.summary,
        code=diagnostic.code,
        location=diagnostic.primary_location,
        hints=help_hints(diagnostic),
    )


def unparsed_finding(line: str, error: str) -> Finding:
    """Return the report entry for a stream line that could not be parsed."""

    return Finding(
        kind=FindingKind.UNPARSED,
        severity=Severity.OTHER,
        label="unparsed",
        message=f"{error} {line.rstrip()}",
    )


def location_reference(span: SourceSpan, cwd: Path) -> LocationReference:
    """Return the display text and ``file://`` URL for ``span`` relative to ``cwd``.

    Args:
        span: Source span whose start position is referenced.
        cwd: Working directory that relative span paths are resolved against.

    Returns:
        LocationReference: ``./path:line:col`` text plus the matching file URL.
    """

    position = f"{span.line_start}:{span.column_start}"
    path = Path(span.file_path)
    if path.is_absolute():
        return LocationReference(text=f"{span.file_path}:{position}", url=f"{path.as_uri()}:{position}")
    target = cwd.absolute() / path
    return LocationReference(text=f"./{span.file_path}:{position}", url=f"{target.as_uri()}:{position}")


def render_finding(finding: Finding, cfg: OutputConfig, cwd: Path) -> Text:
    """Return the styled report line for ``finding``.

    Informational findings render as their bare message; everything else leads
    with its label, then the (optionally linked) code, the message, help hints
    and finally the location reference.
    """

    text = Text()
    if finding.kind is FindingKind.PACKAGE:
        text.append(finding.message, style="bold")
        return text
    if finding.severity is Severity.INFO:
        text.append(finding.message)
        return text

    text.append(finding.display_label, style=severity_color(finding.severity))
    if finding.code:
        url = rule_reference(finding.code) if cfg.hyperlinks else None
        text.append(" ")
        text.append(finding.code, style=Style(link=url) if url else CODE_STYLE)
    text.append(" ")
    text.append(finding.message)
    for hint in finding.hints:
        text.append(" ")
        text.append("help:", style="bold")
        text.append(f" {hint}")
    if finding.location is not None:
        reference = location_reference(finding.location, cwd)
        text.append(" at ")
        text.append(
            reference.text,
            style=Style(color=LOCATION_STYLE, link=reference.url if cfg.hyperlinks else None),
        )
    return text


def render_text(findings: Iterable[Finding], cfg: OutputConfig, cwd: Path) -> list[Text]:
    """Render every finding in order; a pure function of its inputs."""

    return [render_finding(finding, cfg, cwd) for finding in findings]


def render_json(findings: Sequence[Finding]) -> str:
    """Serialise ``findings`` as a JSON array."""

    return json.dumps([finding.model_dump(mode="json") for finding in findings], indent=2)


def has_errors(findings: Iterable[Finding]) -> bool:
    """Return ``True`` when any finding is error-class; such a report fails."""

    return any(finding.severity is Severity.ERROR for finding in findings)


def severity_counts(findings: Iterable[Finding]) -> dict[Severity, int]:
    """Return the number of findings per severity class, omitting empty classes."""

    counts: dict[Severity, int] = {}
    for finding in findings:
        counts[finding.severity] = counts.get(finding.severity, 0) + 1
    return counts


__all__ = [
    "FURTHER_INFORMATION_PREFIX",
    "LocationReference",
    "diagnostic_finding",
    "has_errors",
    "help_hints",
    "location_reference",
    "render_finding",
    "render_json",
    "render_text",
    "severity_counts",
    "unparsed_finding",
]
