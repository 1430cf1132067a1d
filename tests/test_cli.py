# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the cargo-qa CLI using recorded tool output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from cargoqa.cli.app import app
from cargoqa.cli.commands import code as code_module
from cargoqa.cli.commands import manifest as manifest_module
from cargoqa.cli.commands import runners as runners_module

runner = CliRunner()


def _write_stream(tmp_path: Path, lines: list[str]) -> Path:
    stream = tmp_path / "clippy.jsonl"
    stream.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return stream


def test_code_reports_filtered_sorted_diagnostics(tmp_path: Path, clippy_line) -> None:
    stream = _write_stream(
        tmp_path,
        [
            clippy_line(message="second", spans=[("src/lib.rs", 20, 1, "let b = x.unwrap();")]),
            clippy_line(message="first", spans=[("src/lib.rs", 3, 5, "let a = y.unwrap();")]),
            clippy_line(message="generated", spans=[("src/lib.rs", 1, 1, "construct_runtime!(")]),
            clippy_line(message="codeless", code=None, spans=[("src/lib.rs", 2, 1, "x")]),
            json.dumps({"reason": "build-finished", "success": True}),
        ],
    )

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--input", str(stream), "--no-emoji"])

    assert result.exit_code == 0, result.output
    lines = [line for line in result.stdout.splitlines() if line.startswith("warning")]
    assert lines == [
        "warning clippy::unwrap_used first at ./src/lib.rs:3:5",
        "warning clippy::unwrap_used second at ./src/lib.rs:20:1",
    ]
    assert "generated" not in result.stdout
    assert "codeless" not in result.stdout
    assert "Passed — 2 warning(s)" in result.stdout


def test_code_exits_non_zero_on_errors_and_reports_bad_lines(tmp_path: Path, clippy_line) -> None:
    stream = _write_stream(
        tmp_path,
        ["not json at all", clippy_line(level="error", code="clippy::indexing_slicing", message="indexing")],
    )

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--input", str(stream)])

    assert result.exit_code == 1
    assert "not json at all" in result.stdout
    assert "error clippy::indexing_slicing indexing" in result.stdout


def test_code_json_output(tmp_path: Path, clippy_line) -> None:
    stream = _write_stream(tmp_path, [clippy_line(children=[("help", "use `expect`")])])

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--input", str(stream), "--format", "json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload[0]["code"] == "clippy::unwrap_used"
    assert payload[0]["hints"] == ["use `expect`"]


def test_code_runs_clippy_when_no_input(tmp_path: Path, clippy_line, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[Path] = []

    def fake_run_clippy(root: Path, config: Any) -> list[str]:
        calls.append(root)
        return [clippy_line(message="from cargo")]

    monkeypatch.setattr(code_module, "run_clippy", fake_run_clippy)

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 0
    assert calls == [tmp_path.resolve()]
    assert "Analysing code via clippy..." in result.stdout
    assert "from cargo" in result.stdout


def test_code_reports_missing_cargo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(root: Path, config: Any) -> list[str]:
        raise FileNotFoundError("Executable 'cargo' was not found on PATH")

    monkeypatch.setattr(code_module, "run_clippy", missing)

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 2
    assert "Executable 'cargo' was not found on PATH" in result.stdout


def test_code_rejects_invalid_config(tmp_path: Path) -> None:
    (tmp_path / ".cargo-qa.toml").write_text('[suppression]\nrules = [{ marker = "" }]\n', encoding="utf-8")
    stream = _write_stream(tmp_path, [])

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--input", str(stream)])

    assert result.exit_code == 2
    assert "invalid configuration" in result.stdout


def test_manifest_reports_findings(tmp_path: Path, metadata_document: dict[str, Any]) -> None:
    document = tmp_path / "metadata.json"
    document.write_text(json.dumps(metadata_document), encoding="utf-8")

    result = runner.invoke(app, ["manifest", "--root", str(tmp_path), "--input", str(document), "--no-emoji"])

    assert result.exit_code == 0
    assert "runtime 0.1.0 (/work/runtime/Cargo.toml)" in result.stdout
    assert "warning no 'authors' found" in result.stdout
    assert "authors: Ada <ada@example.com>" in result.stdout
    assert "warning polkadot-v0.9.30 for 'frame-support' is out of date" in result.stdout


def test_manifest_reports_deserialisation_failure(tmp_path: Path) -> None:
    document = tmp_path / "metadata.json"
    document.write_text("{oops", encoding="utf-8")

    result = runner.invoke(app, ["manifest", "--root", str(tmp_path), "--input", str(document)])

    assert result.exit_code == 1
    assert "could not deserialise" in result.stdout


def test_manifest_runs_cargo_metadata(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(manifest_module, "run_metadata", lambda root: '{"packages": []}')

    result = runner.invoke(app, ["manifest", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 0
    assert "Analysing manifest via metadata..." in result.stdout


def test_test_command_forwards_arguments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, list[str]]] = []

    def fake_run_cargo(root: Path, subcommand: str, args: list[str]) -> int:
        calls.append((subcommand, list(args)))
        return 101

    monkeypatch.setattr(runners_module, "run_cargo", fake_run_cargo)

    result = runner.invoke(app, ["test", "--root", str(tmp_path), "--", "--release", "my_test"])

    assert result.exit_code == 101
    assert calls == [("test", ["--release", "my_test"])]


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("cargo-qa ")


def test_bench_command_forwards_arguments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, list[str]]] = []

    def fake_run_cargo(root: Path, subcommand: str, args: list[str]) -> int:
        calls.append((subcommand, list(args)))
        return 0

    monkeypatch.setattr(runners_module, "run_cargo", fake_run_cargo)

    result = runner.invoke(app, ["bench", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert calls == [("bench", [])]


def test_code_reports_undecodable_bytes_as_unparsed(tmp_path: Path, clippy_line) -> None:
    stream = tmp_path / "clippy.jsonl"
    stream.write_bytes(clippy_line(message="kept").encode("utf-8") + b"\n\xff\xfe garbage\n")

    result = runner.invoke(app, ["code", "--root", str(tmp_path), "--input", str(stream), "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "unparsed" in result.stdout
    assert "garbage" in result.stdout
    assert "kept" in result.stdout


def test_manifest_fails_on_invalid_dependency_source(tmp_path: Path) -> None:
    config = tmp_path / "cargo-qa.toml"
    config.write_text('[[manifest.staleness]]\nsource-prefix = "git+https://exa"\ncurrent-tags = ["v1"]\n', encoding="utf-8")
    document = tmp_path / "metadata.json"
    package = {
        "name": "demo",
        "manifest_path": "/work/demo/Cargo.toml",
        "version": "0.1.0",
        "authors": ["Ada <ada@example.com>"],
        "dependencies": [{"name": "dep", "source": "git+https://exa mple.com/repo?branch=v1"}],
    }
    document.write_text(json.dumps({"packages": [package]}), encoding="utf-8")

    result = runner.invoke(
        app,
        ["manifest", "--root", str(tmp_path), "--input", str(document), "--config", str(config), "--no-emoji"],
    )

    assert result.exit_code == 1
    assert "could not parse source for 'dep'" in result.stdout
    assert "Failed — 1 error(s)" in result.stdout


def test_runner_reports_missing_cargo_without_emoji(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def missing_cargo(root: Path, subcommand: str, args: list[str]) -> int:
        raise FileNotFoundError("cargo executable not found on PATH")

    monkeypatch.setattr(runners_module, "run_cargo", missing_cargo)

    result = runner.invoke(app, ["test", "--root", str(tmp_path), "--no-emoji", "--no-color"])

    assert result.exit_code == 2
    assert "cargo executable not found on PATH" in result.stdout
    assert "❌" not in result.stdout
