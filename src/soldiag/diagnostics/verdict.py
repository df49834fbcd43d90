# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single source of truth for the compilation verdict."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import Diagnostic


@dataclass(frozen=True, slots=True)
class Verdict:
    """Overall outcome of a compilation attempt."""

    success: bool
    summary_message: str


def classify(
    errors: Sequence[Diagnostic],
    warnings: Sequence[Diagnostic],
    explicit_signal: bool | None,
) -> Verdict:
    """Return the verdict for the partitioned diagnostics.

    An explicit upstream signal is necessary but not sufficient: any error
    diagnostic vetoes success even when the toolchain reported success.

    Args:
        errors: Error diagnostics after deduplication.
        warnings: Warning diagnostics after deduplication.
        explicit_signal: Upstream success/exit signal, ``None`` when absent.

    Returns:
        Verdict: Success flag and one-line summary.
    """

    success = not errors if explicit_signal is None else explicit_signal and not errors
    return Verdict(success=success, summary_message=summary_message(success, len(errors), len(warnings)))


def summary_message(success: bool, error_count: int, warning_count: int) -> str:
    """Return the human-readable one-line status."""

    if not success:
        return f"Compilation failed with {error_count} error(s)"
    if warning_count:
        return f"Compilation completed with {warning_count} warning(s)"
    return "Compilation completed"


__all__ = ["Verdict", "classify", "summary_message"]
