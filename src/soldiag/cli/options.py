# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer parameter declarations and option models for ``soldiag normalize``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

STDIN_MARKER = "-"


class OutputFormat(str, Enum):
    """Report formats supported by the CLI."""

    JSON = "json"
    TABLE = "table"


PAYLOAD_ARGUMENT = Annotated[
    str,
    typer.Argument(
        metavar="[PAYLOAD]",
        help="File holding a JSON payload or raw compiler output; '-' reads stdin.",
    ),
]
FORMAT_OPTION = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", case_sensitive=False, help="Report format."),
]
SOURCE_ROOT_OPTION = Annotated[
    list[str] | None,
    typer.Option(
        "--source-root",
        help="Path prefix stripped from reported files. Repeatable; replaces configured roots.",
    ),
]
FALLBACK_FILE_OPTION = Annotated[
    str | None,
    typer.Option("--fallback-file", help="File assigned to diagnostics without a location."),
]
SOURCE_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--source",
        help="Contract source file; its first contract name becomes the fallback file.",
    ),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML configuration file or pyproject.toml."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show raw text and informational diagnostics."),
]
NO_COLOR_OPTION = Annotated[
    bool,
    typer.Option("--no-color", help="Disable ANSI colour output."),
]
NO_EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--no-emoji", help="Disable emoji in output."),
]


@dataclass(slots=True)
class NormalizeCLIOptions:
    """Normalised CLI inputs for the ``normalize`` command."""

    payload: str
    output_format: OutputFormat
    source_roots: tuple[str, ...]
    fallback_file: str | None
    source: Path | None
    config_path: Path | None
    verbose: bool
    use_color: bool
    use_emoji: bool

    @property
    def reads_stdin(self) -> bool:
        """Return ``True`` when the payload should be read from stdin."""
        return self.payload == STDIN_MARKER


def build_normalize_options(
    payload: str,
    output_format: OutputFormat,
    source_roots: list[str] | None,
    fallback_file: str | None,
    source: Path | None,
    config_path: Path | None,
    verbose: bool,
    no_color: bool,
    no_emoji: bool,
) -> NormalizeCLIOptions:
    """Construct :class:`NormalizeCLIOptions` from Typer parameters."""

    return NormalizeCLIOptions(
        payload=payload,
        output_format=output_format,
        source_roots=tuple(source_roots or ()),
        fallback_file=fallback_file or None,
        source=source.expanduser() if source is not None else None,
        config_path=config_path.expanduser() if config_path is not None else None,
        verbose=verbose,
        use_color=not no_color,
        use_emoji=not no_emoji,
    )


__all__ = [
    "CONFIG_OPTION",
    "FALLBACK_FILE_OPTION",
    "FORMAT_OPTION",
    "NO_COLOR_OPTION",
    "NO_EMOJI_OPTION",
    "NormalizeCLIOptions",
    "OutputFormat",
    "PAYLOAD_ARGUMENT",
    "SOURCE_OPTION",
    "SOURCE_ROOT_OPTION",
    "STDIN_MARKER",
    "VERBOSE_OPTION",
    "build_normalize_options",
]
