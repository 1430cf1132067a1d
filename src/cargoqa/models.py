# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the cargoqa package."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity, severity_from_level


class SourceSpan(BaseModel):
    """Source region covered by a diagnostic, including the literal text."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    line_start: int
    column_start: int
    line_end: int
    column_end: int
    text: str = ""


class Annotation(BaseModel):
    """Child note attached to a diagnostic (``help``, ``note``, ...)."""

    model_config = ConfigDict(frozen=True)

    level: str
    summary: str


class Diagnostic(BaseModel):
    """Single issue reported by the linter."""

    model_config = ConfigDict(frozen=True)

    level: str
    summary: str
    code: str | None = None
    locations: tuple[SourceSpan, ...] = Field(default_factory=tuple)
    annotations: tuple[Annotation, ...] = Field(default_factory=tuple)

    @property
    def severity(self) -> Severity:
        """Return the three-way display class derived from :attr:`level`."""
        return severity_from_level(self.level)

    @property
    def primary_location(self) -> SourceSpan | None:
        """Return the first reported span, or ``None`` for location-less diagnostics."""
        return self.locations[0] if self.locations else None


class Dependency(BaseModel):
    """Dependency declared by a manifest package."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    source_reference: str | None = Field(default=None, alias="source")


class ManifestPackage(BaseModel):
    """Package entry reported by the build-manifest inspector."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    manifest_location: str = Field(alias="manifest_path")
    version: str
    license: str | None = None
    license_file: str | None = None
    description: str | None = None
    authors: tuple[str, ...] = Field(default_factory=tuple)
    repository_url: str | None = Field(default=None, alias="repository")
    rust_version: str | None = None
    dependencies: tuple[Dependency, ...] = Field(default_factory=tuple)


class Manifest(BaseModel):
    """Top-level manifest document; package order follows the source."""

    model_config = ConfigDict(frozen=True)

    packages: tuple[ManifestPackage, ...]


class FindingKind(str, Enum):
    """Closed set of report entries emitted by both pipelines."""

    DIAGNOSTIC = "diagnostic"
    UNPARSED = "unparsed"
    PACKAGE = "package"
    FIELD_PRESENT = "field-present"
    FIELD_MISSING = "field-missing"
    STALE_DEPENDENCY = "stale-dependency"
    INCONSISTENT_SOURCE = "inconsistent-source"
    INVALID_SOURCE = "invalid-source"
    MANIFEST_ERROR = "manifest-error"


class Finding(BaseModel):
    """Unit of report output shared by the diagnostic and manifest pipelines."""

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    severity: Severity
    message: str
    label: str | None = None
    code: str | None = None
    subject: str | None = None
    location: SourceSpan | None = None
    hints: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def display_label(self) -> str:
        """Return the leading label shown for the finding (raw level or severity)."""
        return self.label or self.severity.value


__all__ = [
    "Annotation",
    "Dependency",
    "Diagnostic",
    "Finding",
    "FindingKind",
    "Manifest",
    "ManifestPackage",
    "SourceSpan",
]
