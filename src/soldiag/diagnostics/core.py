# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic normalization and deduplication helpers."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Final

from pydantic import ValidationError

from ..config import DEFAULT_CONFIG, NormalizerConfig
from ..models import Diagnostic, RawDiagnostic
from ..paths import display_path

LOGGER = logging.getLogger(__name__)

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")

type DedupKey = tuple[str, int, str]


def collapse_whitespace(text: str) -> str:
    """Return ``text`` trimmed with every whitespace run collapsed to one space."""

    return _WHITESPACE.sub(" ", text).strip()


def normalize_diagnostics(
    candidates: Sequence[RawDiagnostic | Diagnostic],
    *,
    config: NormalizerConfig = DEFAULT_CONFIG,
) -> list[Diagnostic]:
    """Normalize heterogeneous diagnostic payloads into canonical models.

    Args:
        candidates: Raw or already normalised diagnostics.
        config: Configuration providing source roots and sentinels.

    Returns:
        list[Diagnostic]: Diagnostics coerced into the canonical representation;
        candidates that fail validation are dropped and logged at DEBUG.
    """
    normalized: list[Diagnostic] = []
    for candidate in candidates:
        if isinstance(candidate, Diagnostic):
            normalized.append(candidate)
            continue
        try:
            normalized.append(normalize_diagnostic(candidate, config=config))
        except ValidationError as exc:
            LOGGER.debug("dropping diagnostic that failed normalization %r: %s", candidate, exc)
    return normalized


def normalize_diagnostic(raw: RawDiagnostic, *, config: NormalizerConfig = DEFAULT_CONFIG) -> Diagnostic:
    """Convert ``raw`` into its canonical :class:`Diagnostic` representation.

    Args:
        raw: Raw diagnostic produced by either parsing branch.
        config: Configuration providing source roots and sentinels.

    Returns:
        Diagnostic: Canonical diagnostic with sentinels applied.
    """
    message = collapse_whitespace(raw.message)
    code = collapse_whitespace(raw.code or "")
    return Diagnostic(
        severity=raw.severity,
        file=display_path(raw.file, source_roots=config.source_roots, unknown=config.unknown_file),
        line=max(raw.line or 0, 0),
        column=max(raw.column or 0, 0),
        code=code or config.unknown_code,
        message=message,
        raw_text=raw.raw_text or raw.message,
    )


def dedupe_key(diag: Diagnostic) -> DedupKey:
    """Return the identity key ``(file, line, normalized_message)`` for ``diag``.

    Column and code are excluded: sub-passes of the toolchain report the same
    message with differing columns.
    """

    return diag.file, diag.line, collapse_whitespace(diag.message).casefold()


def dedupe_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Return ``diagnostics`` without duplicates, keeping the first occurrence.

    Encounter order is preserved; nothing is re-sorted.
    """

    seen: set[DedupKey] = set()
    kept: list[Diagnostic] = []
    for diag in diagnostics:
        key = dedupe_key(diag)
        if key in seen:
            continue
        seen.add(key)
        kept.append(diag)
    return kept


__all__ = [
    "collapse_whitespace",
    "dedupe_diagnostics",
    "dedupe_key",
    "normalize_diagnostic",
    "normalize_diagnostics",
]
