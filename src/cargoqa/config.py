# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the diagnostic and manifest pipelines."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class SuppressionRule(BaseModel):
    """Literal marker that hides diagnostics raised inside generated code.

    ``codes`` scopes the rule to specific diagnostic codes; ``None`` makes the
    rule apply regardless of code.
    """

    model_config = ConfigDict(frozen=True)

    marker: str
    codes: frozenset[str] | None = None

    @field_validator("marker")
    @classmethod
    def _require_marker(cls, value: str) -> str:
        if not value:
            raise ValueError("suppression marker must not be empty")
        return value

    def applies_to(self, code: str | None) -> bool:
        """Return ``True`` when the rule is unscoped or scoped to ``code``."""

        if self.codes is None:
            return True
        return code is not None and code in self.codes


DEFAULT_SUPPRESSION_RULES: Final[tuple[SuppressionRule, ...]] = (
    SuppressionRule(marker="construct_runtime!"),
    SuppressionRule(marker="impl_runtime_apis!"),
    SuppressionRule(marker="parameter_types!"),
    SuppressionRule(
        marker="#[pallet::",
        codes=frozenset({"clippy::integer_arithmetic", "clippy::arithmetic_side_effects"}),
    ),
    SuppressionRule(marker="#[derive(", codes=frozenset({"clippy::integer_arithmetic"})),
)


class SuppressionConfig(BaseModel):
    """Suppression policy applied to parsed diagnostics."""

    model_config = ConfigDict(frozen=True)

    rules: tuple[SuppressionRule, ...] = DEFAULT_SUPPRESSION_RULES
    require_code: bool = True


class StalenessPolicy(BaseModel):
    """Current version tags for dependencies pulled from one upstream source."""

    model_config = ConfigDict(frozen=True)

    source_prefix: str
    current_tags: frozenset[str]


DEFAULT_STALENESS_POLICIES: Final[tuple[StalenessPolicy, ...]] = (
    StalenessPolicy(
        source_prefix="git+https://github.com/paritytech/substrate",
        current_tags=frozenset({"polkadot-v0.9.42", "polkadot-v0.9.43", "polkadot-v1.0.0"}),
    ),
)


class ManifestCheck(str, Enum):
    """Recommended manifest fields that may be audited."""

    AUTHORS = "authors"
    DESCRIPTION = "description"
    LICENSE = "license"
    REPOSITORY = "repository"
    RUST_VERSION = "rust-version"


DEFAULT_MANIFEST_CHECKS: Final[tuple[ManifestCheck, ...]] = (
    ManifestCheck.AUTHORS,
    ManifestCheck.DESCRIPTION,
    ManifestCheck.LICENSE,
    ManifestCheck.REPOSITORY,
)


class ManifestConfig(BaseModel):
    """Manifest audit settings."""

    model_config = ConfigDict(frozen=True)

    checks: tuple[ManifestCheck, ...] = DEFAULT_MANIFEST_CHECKS
    staleness: tuple[StalenessPolicy, ...] = DEFAULT_STALENESS_POLICIES
    check_consistency: bool = True


DEFAULT_WARN_LINTS: Final[tuple[str, ...]] = ("clippy::too-many-lines",)
DEFAULT_DENY_LINTS: Final[tuple[str, ...]] = (
    "clippy::expect_used",
    "clippy::unwrap_used",
    "clippy::ok_expect",
    "clippy::integer_division",
    "clippy::indexing_slicing",
    "clippy::integer_arithmetic",
    "clippy::match_on_vec_items",
    "clippy::manual_strip",
    "clippy::await_holding_refcell_ref",
)


class LintConfig(BaseModel):
    """Linter invocation settings, including the transient lint config file."""

    model_config = ConfigDict(frozen=True)

    warn: tuple[str, ...] = DEFAULT_WARN_LINTS
    deny: tuple[str, ...] = DEFAULT_DENY_LINTS
    extra_args: tuple[str, ...] = Field(default_factory=tuple)
    lint_config_file: str = "clippy.toml"
    lint_config_contents: str = "too-many-lines-threshold=30\n"


class OutputConfig(BaseModel):
    """Presentation flags consumed by the report emitters."""

    model_config = ConfigDict(frozen=True)

    color: bool = True
    emoji: bool = True
    hyperlinks: bool = True
    format: Literal["text", "json"] = "text"


class Config(BaseModel):
    """Top-level configuration passed explicitly to each pipeline."""

    model_config = ConfigDict(frozen=True)

    suppression: SuppressionConfig = Field(default_factory=SuppressionConfig)
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    lint: LintConfig = Field(default_factory=LintConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping of the configuration."""

        return self.model_dump(mode="json")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Validate ``data`` into a :class:`Config`.

        Raises:
            ConfigError: If ``data`` does not describe a valid configuration.
        """

        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc


__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_DENY_LINTS",
    "DEFAULT_MANIFEST_CHECKS",
    "DEFAULT_STALENESS_POLICIES",
    "DEFAULT_SUPPRESSION_RULES",
    "DEFAULT_WARN_LINTS",
    "LintConfig",
    "ManifestCheck",
    "ManifestConfig",
    "OutputConfig",
    "StalenessPolicy",
    "SuppressionConfig",
    "SuppressionRule",
]
