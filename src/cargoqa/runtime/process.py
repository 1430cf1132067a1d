# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = False,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute ``args`` after resolving the executable on ``PATH``.

    Args:
        args: Command and arguments.
        cwd: Working directory for the child process.
        env: Optional replacement environment.
        check: Raise :class:`subprocess.CalledProcessError` on non-zero exit.
        capture_output: Capture stdout/stderr instead of inheriting the terminal.

    Returns:
        subprocess.CompletedProcess[str]: Completed process with decoded output.

    Raises:
        FileNotFoundError: If the executable cannot be located.
    """

    normalized = _normalize_args(args)
    LOGGER.debug("running %s in %s", " ".join(normalized), cwd or Path.cwd())
    return subprocess.run(
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        env=dict(env) if env is not None else None,
        check=check,
        capture_output=capture_output,
        text=True,
        encoding="utf-8",
        errors="replace",
    )


__all__ = ["run_command"]
