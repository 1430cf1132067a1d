# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cargoqa.config import DEFAULT_SUPPRESSION_RULES, Config, ConfigError, ManifestCheck
from cargoqa.config_loader import ConfigLoader, TomlConfigSource, deep_merge, expand_env, load_config


def test_defaults_without_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == Config()
    assert config.suppression.rules == DEFAULT_SUPPRESSION_RULES
    assert config.lint.lint_config_file == "clippy.toml"


def test_project_file_overrides_defaults(tmp_path: Path) -> None:
    (tmp_path / ".cargo-qa.toml").write_text(
        """
[suppression]
require-code = false

[[suppression.rules]]
marker = "decl_module!"

[[suppression.rules]]
marker = "#[pallet::"
codes = ["clippy::indexing_slicing"]

[manifest]
checks = ["license", "rust-version"]

[[manifest.staleness]]
source-prefix = "git+https://github.com/paritytech/polkadot-sdk"
current-tags = ["release-1.1.0"]
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.suppression.require_code is False
    assert [rule.marker for rule in config.suppression.rules] == ["decl_module!", "#[pallet::"]
    assert config.suppression.rules[0].codes is None
    assert config.suppression.rules[1].codes == frozenset({"clippy::indexing_slicing"})
    assert config.manifest.checks == (ManifestCheck.LICENSE, ManifestCheck.RUST_VERSION)
    assert config.manifest.staleness[0].current_tags == frozenset({"release-1.1.0"})
    assert config.lint == Config().lint


def test_cargo_metadata_table_is_read(tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").write_text(
        """
[package]
name = "demo"
version = "0.1.0"

[package.metadata.cargo-qa.lint]
deny = ["clippy::panic"]
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.lint.deny == ("clippy::panic",)
    assert config.lint.warn == Config().lint.warn


def test_explicit_file_wins_over_cargo_metadata(tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").write_text(
        '[workspace]\nmembers = []\n\n[workspace.metadata.cargo-qa.output]\nemoji = false\ncolor = false\n',
        encoding="utf-8",
    )
    explicit = tmp_path / "ci.toml"
    explicit.write_text("[output]\ncolor = true\n", encoding="utf-8")

    config = load_config(tmp_path, explicit)

    assert config.output.emoji is False
    assert config.output.color is True


def test_includes_and_env_expansion(tmp_path: Path) -> None:
    (tmp_path / "base.toml").write_text('[lint]\nwarn = ["clippy::todo"]\n', encoding="utf-8")
    main = tmp_path / "main.toml"
    main.write_text('include = "base.toml"\n\n[lint]\nlint-config-file = "${CFG_NAME}"\n', encoding="utf-8")

    data = TomlConfigSource(main, env={"CFG_NAME": "ci-clippy.toml"}).load()

    assert data == {"lint": {"warn": ["clippy::todo"], "lint_config_file": "ci-clippy.toml"}}


def test_circular_include_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('include = "b.toml"\n', encoding="utf-8")
    (tmp_path / "b.toml").write_text('include = "a.toml"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Circular include"):
        TomlConfigSource(tmp_path / "a.toml").load()


def test_invalid_values_raise_config_error(tmp_path: Path) -> None:
    (tmp_path / ".cargo-qa.toml").write_text('[manifest]\nchecks = ["homepage"]\n', encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".cargo-qa.toml").write_text("[lint\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader.for_root(tmp_path, tmp_path / "missing.toml")


def test_deep_merge_replaces_lists_and_merges_tables() -> None:
    merged = deep_merge({"a": {"b": [1], "c": 1}}, {"a": {"b": [2]}})
    assert merged == {"a": {"b": [2], "c": 1}}


def test_expand_env_leaves_unknown_variables() -> None:
    data = {"lint": {"extra_args": ["--target-dir", "${TARGET}", "$MISSING"]}, "flag": True}

    expanded = expand_env(data, {"TARGET": "/tmp/out"})

    assert expanded == {"lint": {"extra_args": ["--target-dir", "/tmp/out", "$MISSING"]}, "flag": True}


def test_to_dict_is_json_compatible() -> None:
    data = Config().to_dict()

    assert data["output"]["format"] == "text"
    assert data["manifest"]["checks"] == ["authors", "description", "license", "repository"]
    assert isinstance(data["manifest"]["staleness"][0]["current_tags"], list)


def test_include_from_cargo_metadata_is_a_plain_fragment(tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "0.1.0"\n\n[package.metadata.cargo-qa]\ninclude = "extra.toml"\n',
        encoding="utf-8",
    )
    (tmp_path / "extra.toml").write_text("[suppression]\nrequire-code = false\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.suppression.require_code is False


def test_suppression_markers_are_not_env_expanded(tmp_path: Path) -> None:
    main = tmp_path / "main.toml"
    main.write_text(
        '[lint]\nlint-config-file = "$crate"\n\n[[suppression.rules]]\nmarker = "$crate::"\n',
        encoding="utf-8",
    )

    data = TomlConfigSource(main, env={"crate": "expanded"}).load()

    assert data["suppression"]["rules"] == [{"marker": "$crate::"}]
    assert data["lint"]["lint_config_file"] == "expanded"
