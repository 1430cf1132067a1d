# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse, suppress, order and convert linter diagnostics into findings."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config import SuppressionConfig
from ..models import Finding
from ..reporting.formatters import diagnostic_finding, unparsed_finding
from .ordering import sort_diagnostics
from .parsing import parse_stream
from .suppression import filter_diagnostics

LOGGER = logging.getLogger(__name__)


class DiagnosticPipeline:
    """Turn a linter JSON-lines stream into ordered report findings."""

    def __init__(self, config: SuppressionConfig) -> None:
        self._config = config

    def run(self, lines: Iterable[str]) -> list[Finding]:
        """Return findings for ``lines``.

        Unparsed lines come first in stream order, followed by the retained
        diagnostics sorted by location.
        """

        parsed = parse_stream(lines)
        kept = filter_diagnostics(parsed.diagnostics, self._config)
        LOGGER.debug(
            "parsed %d diagnostic(s), suppressed %d, %d unparsed line(s)",
            len(parsed.diagnostics),
            len(parsed.diagnostics) - len(kept),
            len(parsed.unparsed),
        )
        findings = [unparsed_finding(item.line, item.error) for item in parsed.unparsed]
        findings.extend(diagnostic_finding(diagnostic) for diagnostic in sort_diagnostics(kept))
        return findings


__all__ = ["DiagnosticPipeline"]
