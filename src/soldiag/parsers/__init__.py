# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public parser exports for converting compiler output into diagnostics."""

from __future__ import annotations

from .base import LinePattern, match_first
from .forge import BUILTIN_NOISE_PATTERNS, LINE_PATTERNS, parse_lines
from .structured import parse_entries

__all__ = [
    "BUILTIN_NOISE_PATTERNS",
    "LINE_PATTERNS",
    "LinePattern",
    "match_first",
    "parse_entries",
    "parse_lines",
]
