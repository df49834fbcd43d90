# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Diagnostics package exposing normalisation, deduplication, and verdict helpers."""

from __future__ import annotations

from .core import collapse_whitespace, dedupe_diagnostics, dedupe_key, normalize_diagnostic, normalize_diagnostics
from .pipeline import DiagnosticPipeline, normalize
from .verdict import Verdict, classify, summary_message

__all__ = (
    "DiagnosticPipeline",
    "Verdict",
    "classify",
    "collapse_whitespace",
    "dedupe_diagnostics",
    "dedupe_key",
    "normalize",
    "normalize_diagnostic",
    "normalize_diagnostics",
    "summary_message",
)
