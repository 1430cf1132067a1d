# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Audit manifest packages for missing fields and stale dependencies."""

from __future__ import annotations

import logging

from ..config import ManifestConfig
from ..models import Finding, FindingKind, ManifestPackage
from ..severity import Severity
from .completeness import check_package
from .parsing import ManifestError, parse_manifest
from .staleness import check_consistency, evaluate_dependency

LOGGER = logging.getLogger(__name__)


class ManifestPipeline:
    """Turn a manifest document into ordered report findings."""

    def __init__(self, config: ManifestConfig) -> None:
        self._config = config

    def run(self, text: str | bytes) -> list[Finding]:
        """Return findings for the manifest document ``text``.

        A document that cannot be deserialised yields a single error finding.
        """

        try:
            manifest = parse_manifest(text)
        except ManifestError as exc:
            LOGGER.debug("manifest deserialisation failed: %s", exc)
            return [
                Finding(
                    kind=FindingKind.MANIFEST_ERROR,
                    severity=Severity.ERROR,
                    message=f"could not deserialise: {exc}",
                )
            ]

        findings: list[Finding] = []
        for package in manifest.packages:
            findings.extend(self.audit_package(package))
        if self._config.check_consistency:
            findings.extend(check_consistency(manifest.packages, self._config.staleness))
        return findings

    def audit_package(self, package: ManifestPackage) -> list[Finding]:
        """Return the header, completeness and staleness findings for ``package``."""

        findings = [
            Finding(
                kind=FindingKind.PACKAGE,
                severity=Severity.INFO,
                message=f"{package.name} {package.version} ({package.manifest_location})",
                subject=package.name,
            )
        ]
        findings.extend(check_package(package, self._config.checks))
        for dependency in package.dependencies:
            for policy in self._config.staleness:
                findings.extend(evaluate_dependency(dependency, policy))
        return findings


__all__ = ["ManifestPipeline"]
