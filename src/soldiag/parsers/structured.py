# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for diagnostics the compiler service already structured."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Final

from pydantic import ValidationError

from ..config import DEFAULT_CONFIG, NormalizerConfig
from ..ingest import StructuredEntry
from ..models import RawDiagnostic
from ..serialization import coerce_optional_int, coerce_optional_str
from ..severity import Severity
from .base import DiagnosticDetails, DiagnosticLocation, append_diagnostic

LOGGER = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE: Final[str] = "Unknown compilation error"
UNKNOWN_WARNING_MESSAGE: Final[str] = "Unknown compilation warning"


def _mapping(value: object) -> Mapping[str, object]:
    """Return ``value`` when it is a mapping, otherwise an empty mapping."""

    return value if isinstance(value, Mapping) else {}


def _entry_location(data: Mapping[str, object], fallback_file: str) -> DiagnosticLocation:
    """Return the entry location, consulting ``sourceLocation`` when flat keys are absent."""

    source_location = _mapping(data.get("sourceLocation"))
    start = _mapping(source_location.get("start"))
    file = coerce_optional_str(data.get("file")) or coerce_optional_str(source_location.get("file"))
    line = coerce_optional_int(data.get("line"))
    if line is None:
        line = coerce_optional_int(start.get("line"))
    column = coerce_optional_int(data.get("column"))
    if column is None:
        column = coerce_optional_int(start.get("column"))
    return DiagnosticLocation(file=file or fallback_file, line=line, column=column)


def _entry_message(data: Mapping[str, object], bucket: Severity) -> str:
    message = coerce_optional_str(data.get("message")) or coerce_optional_str(data.get("formattedMessage"))
    if message:
        return message
    return UNKNOWN_ERROR_MESSAGE if bucket is Severity.ERROR else UNKNOWN_WARNING_MESSAGE


def parse_entries(
    entries: Sequence[StructuredEntry],
    *,
    config: NormalizerConfig = DEFAULT_CONFIG,
    fallback_file: str | None = None,
) -> list[RawDiagnostic]:
    """Convert structured upstream entries into raw diagnostics.

    The bucket that carried an entry decides its severity, so an item the
    service filed under ``errors`` can never be downgraded by its own
    ``severity`` field.

    Args:
        entries: Structured entries in upstream order (errors first).
        config: Normalizer configuration.
        fallback_file: File assigned to entries without a location.

    Returns:
        list[RawDiagnostic]: Raw diagnostics; unconvertible entries are dropped.
    """

    fallback = fallback_file or config.unknown_file
    results: list[RawDiagnostic] = []
    for entry in entries:
        data = entry.data
        formatted = coerce_optional_str(data.get("formattedMessage"))
        message = _entry_message(data, entry.bucket)
        try:
            append_diagnostic(
                results,
                location=_entry_location(data, fallback),
                details=DiagnosticDetails(
                    severity=entry.bucket,
                    message=message,
                    code=coerce_optional_str(data.get("code")) or coerce_optional_str(data.get("errorCode")),
                    raw_text=formatted or message,
                ),
            )
        except ValidationError as exc:
            LOGGER.debug("dropping malformed structured entry %r: %s", dict(data), exc)
    return results


__all__ = ["parse_entries"]
