# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

ClippyLine = Callable[..., str]


def _span(file_name: str, line: int, column: int, text: str | None) -> dict[str, Any]:
    span: dict[str, Any] = {
        "file_name": file_name,
        "line_start": line,
        "column_start": column,
        "line_end": line,
        "column_end": column + 5,
        "is_primary": True,
    }
    if text is not None:
        span["text"] = [{"text": text, "highlight_start": 1, "highlight_end": 5}]
    return span


def build_clippy_line(
    *,
    message: str = "used `unwrap()` on an `Option` value",
    level: str = "warning",
    code: str | None = "clippy::unwrap_used",
    spans: list[tuple[str, int, int, str | None]] | None = None,
    children: list[tuple[str, str]] | None = None,
) -> str:
    """Return one ``compiler-message`` record as clippy prints it."""

    record = {
        "reason": "compiler-message",
        "package_id": "demo 0.1.0 (path+file:///work/demo)",
        "manifest_path": "/work/demo/Cargo.toml",
        "message": {
            "rendered": message,
            "code": {"code": code, "explanation": None} if code is not None else None,
            "level": level,
            "message": message,
            "spans": [_span(*span) for span in (spans or [])],
            "children": [
                {"code": None, "level": child_level, "message": child_message, "spans": [], "children": []}
                for child_level, child_message in (children or [])
            ],
        },
    }
    return json.dumps(record)


@pytest.fixture
def clippy_line() -> ClippyLine:
    """Return the clippy record builder."""
    return build_clippy_line


@pytest.fixture
def metadata_document() -> dict[str, Any]:
    """Return a ``cargo metadata --no-deps`` document with two packages."""

    return {
        "packages": [
            {
                "name": "runtime",
                "version": "0.1.0",
                "id": "runtime 0.1.0 (path+file:///work/runtime)",
                "license": None,
                "license_file": None,
                "description": None,
                "source": None,
                "authors": [],
                "repository": None,
                "rust_version": None,
                "edition": "2021",
                "manifest_path": "/work/runtime/Cargo.toml",
                "dependencies": [
                    {
                        "name": "frame-support",
                        "source": "git+https://github.com/paritytech/substrate?branch=polkadot-v0.9.30",
                        "req": "*",
                        "kind": None,
                    },
                    {"name": "serde", "source": "registry+https://github.com/rust-lang/crates.io-index"},
                    {"name": "local-helper", "source": None},
                ],
            },
            {
                "name": "node",
                "version": "1.2.3",
                "license": "Apache-2.0",
                "description": "Node binary",
                "authors": ["Ada <ada@example.com>"],
                "repository": "https://example.com/node",
                "edition": "2021",
                "manifest_path": "/work/node/Cargo.toml",
                "dependencies": [
                    {
                        "name": "sc-cli",
                        "source": "git+https://github.com/paritytech/substrate?branch=polkadot-v1.0.0",
                    },
                ],
            },
        ],
        "workspace_members": [],
        "target_directory": "/work/target",
        "version": 1,
    }
