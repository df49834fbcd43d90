# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for raw ``forge``/``solc`` console output.

Recognisers are tried in table order and the first match wins, so stricter
formats that carry more information sit ahead of looser ones.  Noise is
filtered before any recogniser runs: ``Error: Compiler run failed:`` would
otherwise be read as a locationless error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Final

from ..config import DEFAULT_CONFIG, NormalizerConfig
from ..ingest import TextLine
from ..models import RawDiagnostic
from ..severity import Severity
from .base import (
    DiagnosticDetails,
    DiagnosticLocation,
    LinePattern,
    append_diagnostic,
    details_from_match,
    is_noise,
    location_from_match,
    match_first,
)

LOGGER = logging.getLogger(__name__)

_SEVERITY: Final[str] = r"(?P<severity>[A-Za-z]{0,64}Error|Warning|Info|Note)"
_LOCATION: Final[str] = r"(?P<file>[^\s:()][^:()]*?):(?P<line>\d+):(?P<column>\d+)"
_BRACKET_CODE: Final[str] = r"\[(?P<code>[^\]\s]+)\]"
_PAREN_CODE: Final[str] = r"\((?P<pcode>\d+)\)"
_MESSAGE: Final[str] = r"(?P<message>\S.*)"
# Keyword patterns scan unlocated text, so their free-text runs are bounded.
_KEYWORD_PREFIX: Final[str] = r"[^:]{0,200}?"
_KEYWORD_TAIL: Final[str] = r"[^:]{0,200}"

LOCATED_WITH_CODE = LinePattern(
    "located-with-code",
    re.compile(rf"^{_LOCATION}:\s*{_SEVERITY}\s*(?:{_BRACKET_CODE}|{_PAREN_CODE})\s*:\s*{_MESSAGE}$", re.IGNORECASE),
)
CODE_THEN_LOCATION = LinePattern(
    "code-then-location",
    re.compile(rf"^{_SEVERITY}\s*{_BRACKET_CODE}\s*\({_LOCATION}\)\s*:\s*{_MESSAGE}$", re.IGNORECASE),
)
LOCATED = LinePattern(
    "located",
    re.compile(rf"^{_LOCATION}:\s*{_SEVERITY}\s*:\s*{_MESSAGE}$", re.IGNORECASE),
)
BARE_KEYWORD = LinePattern(
    "bare-keyword",
    re.compile(rf"^{_SEVERITY}\b\s*(?:{_BRACKET_CODE}|{_PAREN_CODE})?{_KEYWORD_TAIL}:\s*{_MESSAGE}$", re.IGNORECASE),
)
EMBEDDED_KEYWORD = LinePattern(
    "embedded-keyword",
    re.compile(
        rf"^{_KEYWORD_PREFIX}\b{_SEVERITY}\b\s*(?:{_BRACKET_CODE}|{_PAREN_CODE})?{_KEYWORD_TAIL}:\s*{_MESSAGE}$",
        re.IGNORECASE,
    ),
    origin_only=True,
)

LINE_PATTERNS: Final[tuple[LinePattern, ...]] = (
    LOCATED_WITH_CODE,
    CODE_THEN_LOCATION,
    LOCATED,
    BARE_KEYWORD,
    EMBEDDED_KEYWORD,
)

LOCATION_CONTINUATION: Final[re.Pattern[str]] = re.compile(rf"^-->\s*{_LOCATION}:?$")

BUILTIN_NOISE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"compiler run failed", re.IGNORECASE),
    re.compile(r"^compiler run successful", re.IGNORECASE),
    re.compile(r"^compiling \d+ files? with", re.IGNORECASE),
    re.compile(r"^solc \S+ finished in", re.IGNORECASE),
    re.compile(r"^no files changed, compilation skipped", re.IGNORECASE),
    re.compile(r"^\d*\s*\|"),
    re.compile(r"^[\^~\-]+$"),
)


def parse_lines(
    lines: Sequence[TextLine],
    *,
    config: NormalizerConfig = DEFAULT_CONFIG,
    fallback_file: str | None = None,
) -> list[RawDiagnostic]:
    """Parse raw toolchain output lines into raw diagnostics.

    Args:
        lines: Trimmed, non-empty output lines tagged with their origin.
        config: Normalizer configuration supplying extra noise patterns.
        fallback_file: File assigned to diagnostics without a location.

    Returns:
        list[RawDiagnostic]: Candidates in emission order, duplicates included.
    """

    noise = BUILTIN_NOISE_PATTERNS + config.compiled_noise_patterns()
    fallback = fallback_file or config.unknown_file
    results: list[RawDiagnostic] = []
    pending: RawDiagnostic | None = None

    for line in lines:
        text = line.text
        continuation = LOCATION_CONTINUATION.match(text)
        if continuation is not None:
            if pending is not None:
                _attach_location(pending, continuation, text)
            else:
                LOGGER.debug("dropping orphan location line: %s", text)
            pending = None
            continue
        pending = None

        if is_noise(text, noise):
            continue

        from_array = line.origin is not None
        found = match_first(text, LINE_PATTERNS, from_array=from_array)
        if found is None:
            if line.origin is Severity.ERROR:
                append_diagnostic(
                    results,
                    location=DiagnosticLocation(file=fallback, line=0, column=0),
                    details=DiagnosticDetails(severity=Severity.ERROR, message=text, raw_text=text),
                )
            else:
                LOGGER.debug("dropping unrecognised output line: %s", text)
            continue

        pattern, match = found
        diagnostic = append_diagnostic(
            results,
            location=location_from_match(match, fallback_file=fallback),
            details=details_from_match(match, default=line.origin or Severity.ERROR, raw_text=text),
        )
        if not pattern.located:
            pending = diagnostic
    return results


def _attach_location(diagnostic: RawDiagnostic, match: re.Match[str], text: str) -> None:
    diagnostic.file = match.group("file")
    diagnostic.line = int(match.group("line"))
    diagnostic.column = int(match.group("column"))
    diagnostic.raw_text = f"{diagnostic.raw_text}\n{text}"


__all__ = [
    "BUILTIN_NOISE_PATTERNS",
    "LINE_PATTERNS",
    "LOCATION_CONTINUATION",
    "parse_lines",
]
