# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for normalizing compiler output."""

from __future__ import annotations

import json
import logging
import sys

import typer

from ..config import DEFAULT_CONFIG, ConfigError, NormalizerConfig, build_config, load_config
from ..diagnostics import normalize
from ..ingest import SOURCE_SUFFIX, contract_name_from_source
from ..logging import fail, warn
from ..reporting import render_collection
from ..serialization import serialize_collection
from .options import (
    CONFIG_OPTION,
    FALLBACK_FILE_OPTION,
    FORMAT_OPTION,
    NO_COLOR_OPTION,
    NO_EMOJI_OPTION,
    PAYLOAD_ARGUMENT,
    SOURCE_OPTION,
    SOURCE_ROOT_OPTION,
    VERBOSE_OPTION,
    NormalizeCLIOptions,
    OutputFormat,
    build_normalize_options,
)

LOGGER = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INPUT_ERROR = 2

_JSON_PREFIXES = ("{", "[", '"')

app = typer.Typer(help="Normalize Solidity compiler output into structured diagnostics.")


class InputError(Exception):
    """Raised when the CLI cannot read the payload or contract source."""


@app.callback()
def main() -> None:
    """Normalize Solidity compiler output into structured diagnostics."""


@app.command("normalize")
def normalize_command(
    payload: PAYLOAD_ARGUMENT = "-",
    output_format: FORMAT_OPTION = OutputFormat.JSON,
    source_roots: SOURCE_ROOT_OPTION = None,
    fallback_file: FALLBACK_FILE_OPTION = None,
    source: SOURCE_OPTION = None,
    config_path: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
) -> None:
    """Normalize a compiler payload and report its diagnostics.

    Raises:
        typer.Exit: Always raised; ``0`` on success, ``1`` when compilation
            failed, ``2`` when the payload or configuration is unreadable.
    """

    options = build_normalize_options(
        payload,
        output_format,
        source_roots,
        fallback_file,
        source,
        config_path,
        verbose,
        no_color,
        no_emoji,
    )
    if options.verbose:
        _ensure_verbose_logger()
    try:
        config = resolve_config(options)
        text = read_payload(options)
        fallback = resolve_fallback_file(options)
    except (ConfigError, InputError) as exc:
        fail(str(exc), use_emoji=options.use_emoji, use_color=options.use_color)
        raise typer.Exit(code=EXIT_INPUT_ERROR) from exc

    collection = normalize(parse_payload(text), config=config, fallback_file=fallback)
    if options.output_format is OutputFormat.JSON:
        document = serialize_collection(collection, include_raw=options.verbose)
        typer.echo(json.dumps(document, indent=2))
    else:
        render_collection(
            collection,
            verbose=options.verbose,
            use_color=options.use_color,
            use_emoji=options.use_emoji,
        )
    raise typer.Exit(code=EXIT_SUCCESS if collection.success else EXIT_FAILURE)


def resolve_config(options: NormalizeCLIOptions) -> NormalizerConfig:
    """Return the configuration selected by ``options``.

    Raises:
        ConfigError: If the configuration file or overrides are invalid.
    """

    config = load_config(options.config_path) if options.config_path is not None else DEFAULT_CONFIG
    if not options.source_roots:
        return config
    return build_config({**config.model_dump(), "source_roots": options.source_roots})


def read_payload(options: NormalizeCLIOptions) -> str:
    """Return the raw payload text from stdin or the named file.

    Raises:
        InputError: If the file cannot be read or decoded.
    """

    if options.reads_stdin:
        return sys.stdin.read()
    try:
        with open(options.payload, encoding="utf-8") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"unable to read payload {options.payload}: {exc}") from exc


def resolve_fallback_file(options: NormalizeCLIOptions) -> str | None:
    """Return the explicit fallback file, or one derived from ``--source``.

    Raises:
        InputError: If the contract source file cannot be read.
    """

    if options.fallback_file is not None or options.source is None:
        return options.fallback_file
    try:
        contract_source = options.source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"unable to read contract source {options.source}: {exc}") from exc
    name = contract_name_from_source(contract_source)
    if name is None:
        message = f"No contract declaration found in {options.source}; using the default fallback file."
        if options.output_format is OutputFormat.JSON:
            LOGGER.warning(message)
        else:
            warn(message, use_emoji=options.use_emoji, use_color=options.use_color)
        return None
    return f"{name}{SOURCE_SUFFIX}"


def parse_payload(text: str) -> object:
    """Decode ``text`` as JSON when it looks like JSON, else keep it as raw output."""

    stripped = text.strip()
    if not stripped.startswith(_JSON_PREFIXES):
        return text
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        LOGGER.debug("payload is not valid JSON; treating it as raw compiler output")
        return text


def _ensure_verbose_logger() -> None:
    """Stream library debug messages to stderr."""

    package_logger = logging.getLogger("soldiag")
    if getattr(package_logger, "_soldiag_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False
    setattr(package_logger, "_soldiag_verbose_configured", True)


__all__ = ["app", "normalize_command", "parse_payload", "read_payload", "resolve_config", "resolve_fallback_file"]
