# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cargo invocations feeding the diagnostic and manifest pipelines."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Final

from ..config import LintConfig
from .process import run_command

LOGGER = logging.getLogger(__name__)

CARGO: Final[str] = "cargo"
MESSAGE_FORMAT_JSON: Final[str] = "--message-format=json"
METADATA_FORMAT_VERSION: Final[str] = "1"


@contextmanager
def transient_lint_config(root: Path, name: str, contents: str) -> Iterator[Path]:
    """Provide a lint configuration file for the duration of the block.

    The file is written only when it does not already exist and is removed
    afterwards, including when the block raises. An existing file is left
    untouched.

    Args:
        root: Project directory that holds the configuration file.
        name: File name, e.g. ``clippy.toml``.
        contents: Text written when the file is created.

    Yields:
        Path: Location of the configuration file.
    """

    path = root / name
    created = False
    if not path.exists():
        path.write_text(contents, encoding="utf-8")
        created = True
        LOGGER.debug("created transient lint config %s", path)
    try:
        yield path
    finally:
        if created:
            path.unlink(missing_ok=True)
            LOGGER.debug("removed transient lint config %s", path)


def clippy_arguments(config: LintConfig) -> list[str]:
    """Return the full ``cargo clippy`` command for ``config``."""

    lint_flags = [f"-W{lint}" for lint in config.warn] + [f"-D{lint}" for lint in config.deny]
    return [CARGO, "clippy", MESSAGE_FORMAT_JSON, *config.extra_args, "--", *lint_flags]


def run_clippy(root: Path, config: LintConfig) -> list[str]:
    """Run clippy in ``root`` and return its JSON-lines stdout.

    Raises:
        FileNotFoundError: If ``cargo`` is not installed.
    """

    with transient_lint_config(root, config.lint_config_file, config.lint_config_contents):
        completed = run_command(clippy_arguments(config), cwd=root)
    if completed.stderr:
        LOGGER.debug("clippy stderr:\n%s", completed.stderr)
    return completed.stdout.splitlines()


def run_metadata(root: Path) -> str:
    """Return ``cargo metadata`` output for the workspace at ``root``.

    Raises:
        FileNotFoundError: If ``cargo`` is not installed.
    """

    completed = run_command(
        [CARGO, "metadata", "--no-deps", "--format-version", METADATA_FORMAT_VERSION],
        cwd=root,
    )
    if completed.returncode != 0:
        LOGGER.warning("cargo metadata exited with status %d: %s", completed.returncode, completed.stderr.strip())
    return completed.stdout


def run_cargo(root: Path, subcommand: str, args: Sequence[str] = ()) -> int:
    """Run a cargo subcommand (``test``, ``bench``) attached to the terminal.

    Returns:
        int: Exit status reported by cargo.
    """

    completed = run_command([CARGO, subcommand, *args], cwd=root, capture_output=False)
    return completed.returncode


__all__ = [
    "clippy_arguments",
    "run_cargo",
    "run_clippy",
    "run_metadata",
    "transient_lint_config",
]
