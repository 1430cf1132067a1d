# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse the linter's JSON-lines stream into :class:`Diagnostic` records."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Final

from pydantic import BaseModel, Field, ValidationError

from ..models import Annotation, Diagnostic, SourceSpan

LOGGER = logging.getLogger(__name__)

COMPILER_MESSAGE_REASON: Final[str] = "compiler-message"


class _WireCode(BaseModel):
    code: str


class _WireText(BaseModel):
    text: str


class _WireSpan(BaseModel):
    file_name: str
    line_start: int
    column_start: int
    line_end: int
    column_end: int
    text: list[_WireText] = Field(default_factory=list)


class _WireMessage(BaseModel):
    code: _WireCode | None = None
    level: str
    message: str
    spans: list[_WireSpan] = Field(default_factory=list)
    children: list[_WireMessage] = Field(default_factory=list)


@dataclass(slots=True, frozen=True)
class UnparsedLine:
    """Stream line that could not be interpreted, kept verbatim for the report."""

    line: str
    error: str


@dataclass(slots=True, frozen=True)
class LineResult:
    """Outcome of parsing one line: a diagnostic, an unparsed line, or neither."""

    diagnostic: Diagnostic | None = None
    unparsed: UnparsedLine | None = None


@dataclass(slots=True)
class ParsedStream:
    """Diagnostics and malformed lines collected from a whole stream."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    unparsed: list[UnparsedLine] = field(default_factory=list)


_SKIPPED: Final[LineResult] = LineResult()


def parse_line(line: str) -> LineResult:
    """Parse a single stream line.

    Lines that are not JSON objects carrying a string ``reason`` are reported as
    unparsed. Records with any reason other than ``compiler-message``, and
    records without a ``message``, are skipped silently.

    Args:
        line: Raw line read from the linter's stdout.

    Returns:
        LineResult: Parsed diagnostic, unparsed line, or an empty result.
    """

    stripped = line.strip()
    if not stripped:
        return _SKIPPED
    try:
        record = json.loads(stripped)
    except json.JSONDecodeError as exc:
        return LineResult(unparsed=UnparsedLine(line=line, error=str(exc)))
    if not isinstance(record, dict):
        return LineResult(unparsed=UnparsedLine(line=line, error="expected a JSON object"))
    reason = record.get("reason")
    if not isinstance(reason, str):
        return LineResult(unparsed=UnparsedLine(line=line, error="missing field `reason`"))
    if reason != COMPILER_MESSAGE_REASON:
        return _SKIPPED
    payload = record.get("message")
    if payload is None:
        return _SKIPPED
    try:
        message = _WireMessage.model_validate(payload)
    except ValidationError as exc:
        return LineResult(unparsed=UnparsedLine(line=line, error=_summarise_validation(exc)))
    return LineResult(diagnostic=_to_diagnostic(message))


def parse_stream(lines: Iterable[str]) -> ParsedStream:
    """Parse every line of a stream, collecting diagnostics and malformed lines."""

    parsed = ParsedStream()
    for line in lines:
        result = parse_line(line)
        if result.diagnostic is not None:
            parsed.diagnostics.append(result.diagnostic)
        elif result.unparsed is not None:
            LOGGER.debug("skipping unparsable line (%s): %s", result.unparsed.error, line)
            parsed.unparsed.append(result.unparsed)
    return parsed


def _to_diagnostic(message: _WireMessage) -> Diagnostic:
    return Diagnostic(
        level=message.level,
        summary=message.message,
        code=message.code.code if message.code is not None else None,
        locations=tuple(
            SourceSpan(
                file_path=span.file_name,
                line_start=span.line_start,
                column_start=span.column_start,
                line_end=span.line_end,
                column_end=span.column_end,
                text="\n".join(entry.text for entry in span.text),
            )
            for span in message.spans
        ),
        annotations=tuple(Annotation(level=child.level, summary=child.message) for child in message.children),
    )


def _summarise_validation(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"invalid `message.{location}`: {first.get('msg', 'invalid value')}" if location else str(exc)


__all__ = [
    "COMPILER_MESSAGE_REASON",
    "LineResult",
    "ParsedStream",
    "UnparsedLine",
    "parse_line",
    "parse_stream",
]
