# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the compilation verdict."""

from __future__ import annotations

import pytest

from soldiag.diagnostics import classify, summary_message
from soldiag.models import Diagnostic
from soldiag.severity import Severity

ERROR = Diagnostic(severity=Severity.ERROR, message="boom")
WARNING = Diagnostic(severity=Severity.WARNING, message="hmm")


@pytest.mark.parametrize(
    ("errors", "signal", "expected"),
    [
        ((), None, True),
        ((ERROR,), None, False),
        ((), True, True),
        ((), False, False),
        ((ERROR,), True, False),
        ((ERROR,), False, False),
    ],
)
def test_classify_truth_table(errors: tuple[Diagnostic, ...], signal: bool | None, expected: bool) -> None:
    assert classify(errors, (), signal).success is expected


def test_classify_summary_counts_warnings_on_success() -> None:
    verdict = classify((), (WARNING, WARNING), True)

    assert verdict.summary_message == "Compilation completed with 2 warning(s)"


def test_summary_message_variants() -> None:
    assert summary_message(False, 3, 1) == "Compilation failed with 3 error(s)"
    assert summary_message(False, 0, 0) == "Compilation failed with 0 error(s)"
    assert summary_message(True, 0, 0) == "Compilation completed"
