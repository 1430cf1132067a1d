# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hide diagnostics raised inside generated or macro-expanded code."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..config import SuppressionConfig, SuppressionRule
from ..models import Diagnostic


def is_suppressed(diagnostic: Diagnostic, rules: Iterable[SuppressionRule]) -> bool:
    """Return ``True`` when a rule marker appears in any span of ``diagnostic``.

    A rule matches when its marker is a substring of a location's literal
    source text and the rule is either unscoped or scoped to the diagnostic's
    code. Diagnostics without locations never match.

    Args:
        diagnostic: Diagnostic to evaluate.
        rules: Suppression rules to apply.

    Returns:
        bool: ``True`` when the diagnostic should be hidden from the report.
    """

    if not diagnostic.locations:
        return False
    applicable = [rule.marker for rule in rules if rule.applies_to(diagnostic.code)]
    if not applicable:
        return False
    return any(marker in span.text for span in diagnostic.locations if span.text for marker in applicable)


def filter_diagnostics(diagnostics: Sequence[Diagnostic], config: SuppressionConfig) -> list[Diagnostic]:
    """Return the diagnostics that survive the configured suppression policy.

    Args:
        diagnostics: Parsed diagnostics in stream order.
        config: Suppression policy; ``require_code`` drops diagnostics without a code.

    Returns:
        list[Diagnostic]: Retained diagnostics, preserving input order.
    """

    kept: list[Diagnostic] = []
    for diagnostic in diagnostics:
        if config.require_code and not diagnostic.code:
            continue
        if is_suppressed(diagnostic, config.rules):
            continue
        kept.append(diagnostic)
    return kept


__all__ = ["filter_diagnostics", "is_suppressed"]
