# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic canonicalisation and deduplication."""

from __future__ import annotations

from soldiag.config import NormalizerConfig
from soldiag.diagnostics import (
    collapse_whitespace,
    dedupe_diagnostics,
    dedupe_key,
    normalize_diagnostic,
    normalize_diagnostics,
)
from soldiag.models import Diagnostic, RawDiagnostic
from soldiag.severity import Severity


def _diag(message: str, *, line: int = 1, column: int = 1, severity: Severity = Severity.ERROR) -> Diagnostic:
    return Diagnostic(severity=severity, file="A.sol", line=line, column=column, message=message)


def test_normalize_diagnostic_applies_sentinels_and_display_path() -> None:
    raw = RawDiagnostic(
        severity=Severity.ERROR,
        message="  Expected   ';'\n but got '}'  ",
        file="./src/contracts/A.sol",
        line=None,
        column=-4,
    )

    diag = normalize_diagnostic(raw)

    assert diag.file == "contracts/A.sol"
    assert (diag.line, diag.column) == (0, 0)
    assert diag.code == "UNKNOWN"
    assert diag.message == "Expected ';' but got '}'"
    assert diag.raw_text == raw.message


def test_normalize_diagnostic_honours_configured_sentinels() -> None:
    config = NormalizerConfig(unknown_file="<input>", unknown_code="N/A", source_roots=())
    raw = RawDiagnostic(severity=Severity.WARNING, message="m", file=" ", code=" ")

    diag = normalize_diagnostic(raw, config=config)

    assert diag.file == "<input>"
    assert diag.code == "N/A"


def test_source_root_prefix_is_not_stripped_from_bare_root() -> None:
    diag = normalize_diagnostic(RawDiagnostic(severity=Severity.ERROR, message="m", file="src/"))

    assert diag.file == "src"


def test_normalize_diagnostics_passes_canonical_items_through() -> None:
    existing = _diag("already canonical")

    result = normalize_diagnostics([existing, RawDiagnostic(severity=Severity.INFO, message="note")])

    assert result[0] is existing
    assert result[1].severity is Severity.INFO


def test_normalize_diagnostics_drops_candidates_that_fail_validation() -> None:
    invalid = RawDiagnostic.model_construct(severity="bogus", message="m")
    valid = RawDiagnostic(severity=Severity.WARNING, message="kept")

    result = normalize_diagnostics([invalid, valid])

    assert [diag.message for diag in result] == ["kept"]


def test_collapse_whitespace() -> None:
    assert collapse_whitespace("  a \t b\n\nc ") == "a b c"


def test_dedupe_key_ignores_column_code_and_case() -> None:
    first = _diag("Unused  Variable", column=3)
    second = Diagnostic(severity=Severity.WARNING, file="A.sol", line=1, column=9, code="2072", message="unused variable")

    assert dedupe_key(first) == dedupe_key(second)


def test_dedupe_keeps_first_occurrence_in_order() -> None:
    diags = [_diag("b", line=2), _diag("a"), _diag("B", line=2, column=7), _diag("a", line=3)]

    result = dedupe_diagnostics(diags)

    assert result == [diags[0], diags[1], diags[3]]


def test_dedupe_is_idempotent() -> None:
    diags = [_diag("x"), _diag("x"), _diag("y"), _diag("x", line=5)]

    once = dedupe_diagnostics(diags)

    assert dedupe_diagnostics(once) == once
