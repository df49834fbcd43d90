# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..models import RawDiagnostic
from ..severity import Severity, severity_from_label


@dataclass(slots=True)
class DiagnosticLocation:
    """Describe the file and position associated with a diagnostic."""

    file: str | None
    line: int | None
    column: int | None


@dataclass(slots=True)
class DiagnosticDetails:
    """Capture diagnostic metadata excluding the physical location."""

    severity: Severity
    message: str
    code: str | None = None
    raw_text: str = ""


def build_raw_diagnostic(*, location: DiagnosticLocation, details: DiagnosticDetails) -> RawDiagnostic:
    """Return a :class:`RawDiagnostic` assembled from location and details."""

    return RawDiagnostic(
        file=location.file,
        line=location.line,
        column=location.column,
        severity=details.severity,
        message=details.message,
        code=details.code,
        raw_text=details.raw_text,
    )


def append_diagnostic(
    collection: list[RawDiagnostic],
    *,
    location: DiagnosticLocation,
    details: DiagnosticDetails,
) -> RawDiagnostic:
    """Build a :class:`RawDiagnostic` and append it to ``collection``.

    Args:
        collection: Target list receiving the diagnostic instance.
        location: Where the issue occurs.
        details: Metadata describing the diagnostic.

    Returns:
        RawDiagnostic: The appended diagnostic, so callers can amend it.
    """

    diagnostic = build_raw_diagnostic(location=location, details=details)
    collection.append(diagnostic)
    return diagnostic


@dataclass(frozen=True, slots=True)
class LinePattern:
    """One recogniser in an ordered line-pattern table.

    Attributes:
        name: Identifier used in debug logging and tests.
        regex: Compiled expression; named groups ``severity``, ``file``,
            ``line``, ``column``, ``code``/``pcode`` and ``message`` are read
            when present.
        origin_only: When ``True`` the pattern only applies to lines that came
            from a string ``errors``/``warnings`` array.
    """

    name: str
    regex: re.Pattern[str]
    origin_only: bool = False

    @property
    def located(self) -> bool:
        """Return ``True`` when the pattern captures a source location."""
        return "file" in self.regex.groupindex

    def match(self, text: str, *, from_array: bool) -> re.Match[str] | None:
        """Return the match for ``text`` when this pattern applies."""
        if self.origin_only and not from_array:
            return None
        return self.regex.match(text)


def match_first(
    text: str,
    patterns: Sequence[LinePattern],
    *,
    from_array: bool = False,
) -> tuple[LinePattern, re.Match[str]] | None:
    """Return the first pattern in ``patterns`` matching ``text``.

    Args:
        text: Trimmed line of toolchain output.
        patterns: Recognisers ordered from most to least specific.
        from_array: Whether the line came from a string diagnostics array.

    Returns:
        tuple[LinePattern, re.Match[str]] | None: Winning pattern and match.
    """

    for pattern in patterns:
        match = pattern.match(text, from_array=from_array)
        if match is not None:
            return pattern, match
    return None


def is_noise(text: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """Return ``True`` when ``text`` matches any noise pattern."""

    return any(pattern.search(text) for pattern in patterns)


def location_from_match(match: re.Match[str], *, fallback_file: str) -> DiagnosticLocation:
    """Return the location captured by ``match`` or the fallback location."""

    groups = match.groupdict()
    if groups.get("file") is None:
        return DiagnosticLocation(file=fallback_file, line=0, column=0)
    return DiagnosticLocation(
        file=groups["file"],
        line=_group_int(groups.get("line")),
        column=_group_int(groups.get("column")),
    )


def details_from_match(match: re.Match[str], *, default: Severity, raw_text: str) -> DiagnosticDetails:
    """Return severity, code, and message captured by ``match``."""

    groups = match.groupdict()
    severity = severity_from_label(groups.get("severity"), default) or default
    code = groups.get("code") or groups.get("pcode")
    return DiagnosticDetails(
        severity=severity,
        message=(groups.get("message") or "").strip(),
        code=code.strip() if code else None,
        raw_text=raw_text,
    )


def _group_int(value: str | None) -> int:
    return int(value) if value and value.isdigit() else 0


__all__ = [
    "DiagnosticDetails",
    "DiagnosticLocation",
    "LinePattern",
    "append_diagnostic",
    "build_raw_diagnostic",
    "details_from_match",
    "is_noise",
    "location_from_match",
    "match_first",
]
