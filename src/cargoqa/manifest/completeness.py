# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Advisory checks for recommended manifest fields."""

from __future__ import annotations

from collections.abc import Iterable

from ..config import ManifestCheck
from ..models import Finding, FindingKind, ManifestPackage
from ..severity import Severity


def field_value(package: ManifestPackage, check: ManifestCheck) -> str | None:
    """Return the display value for ``check`` or ``None`` when the field is missing."""

    match check:
        case ManifestCheck.AUTHORS:
            return ", ".join(package.authors) if package.authors else None
        case ManifestCheck.DESCRIPTION:
            return package.description or None
        case ManifestCheck.LICENSE:
            if package.license:
                return package.license
            return f"{package.license_file} (file)" if package.license_file else None
        case ManifestCheck.REPOSITORY:
            return package.repository_url or None
        case ManifestCheck.RUST_VERSION:
            return package.rust_version or None
        case _:
            return None


def check_package(package: ManifestPackage, checks: Iterable[ManifestCheck]) -> list[Finding]:
    """Return one finding per configured check, in check order.

    Present fields yield an informational line carrying the value; missing
    fields yield a warning.
    """

    findings: list[Finding] = []
    for check in checks:
        value = field_value(package, check)
        if value is None:
            findings.append(
                Finding(
                    kind=FindingKind.FIELD_MISSING,
                    severity=Severity.WARNING,
                    message=f"no '{check.value}' found",
                    subject=package.name,
                )
            )
        else:
            findings.append(
                Finding(
                    kind=FindingKind.FIELD_PRESENT,
                    severity=Severity.INFO,
                    message=f"{check.value}: {value}",
                    subject=package.name,
                )
            )
    return findings


__all__ = ["check_package", "field_value"]
