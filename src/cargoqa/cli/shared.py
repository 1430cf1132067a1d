# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Options and configuration plumbing shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from ..config import Config, ConfigError
from ..config_loader import load_config
from ..console import detect_tty
from ..logging import fail, info


class OutputFormat(str, Enum):
    """Report formats accepted by ``--format``."""

    TEXT = "text"
    JSON = "json"


RootOption = Annotated[
    Path,
    typer.Option("--root", "-r", help="Cargo project root.", file_okay=False, exists=True),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML configuration file (defaults to .cargo-qa.toml)."),
]
FormatOption = Annotated[OutputFormat, typer.Option("--format", "-f", help="Report format.")]
ColorOption = Annotated[bool, typer.Option("--color/--no-color", help="Colourise output on terminals.")]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate status lines with emoji.")]
HyperlinkOption = Annotated[
    bool,
    typer.Option("--hyperlinks/--no-hyperlinks", help="Emit terminal hyperlinks for codes and locations."),
]


@dataclass(slots=True, frozen=True)
class CommandSettings:
    """Resolved project root and configuration for one command invocation."""

    root: Path
    config: Config

    @property
    def text_output(self) -> bool:
        """Return ``True`` when status lines may be interleaved with the report."""
        return self.config.output.format == "text"

    def status(self, message: str) -> None:
        """Print a status line unless machine-readable output was requested."""
        if self.text_output:
            info(message, use_emoji=self.config.output.emoji, use_color=self.config.output.color and detect_tty())

    def abort(self, message: str, *, code: int = 2) -> typer.Exit:
        """Report ``message`` as a failure and return the exit to raise."""
        fail(message, use_emoji=self.config.output.emoji, use_color=self.config.output.color and detect_tty())
        return typer.Exit(code=code)


def load_settings(
    *,
    root: Path,
    config_file: Path | None,
    output_format: OutputFormat,
    color: bool,
    emoji: bool,
    hyperlinks: bool,
) -> CommandSettings:
    """Load configuration for ``root`` and apply command-line output overrides.

    Raises:
        typer.Exit: With status 2 when the configuration is invalid.
    """

    resolved = root.resolve()
    try:
        config = load_config(resolved, config_file)
    except ConfigError as exc:
        fail(str(exc), use_emoji=emoji, use_color=color and detect_tty())
        raise typer.Exit(code=2) from exc
    output = config.output.model_copy(
        update={
            "format": output_format.value,
            "color": color and config.output.color,
            "emoji": emoji and config.output.emoji,
            "hyperlinks": hyperlinks and config.output.hyperlinks,
        }
    )
    return CommandSettings(root=resolved, config=config.model_copy(update={"output": output}))


__all__ = [
    "ColorOption",
    "CommandSettings",
    "ConfigOption",
    "EmojiOption",
    "FormatOption",
    "HyperlinkOption",
    "OutputFormat",
    "RootOption",
    "load_settings",
]
