# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Remediation suggestion package."""

from __future__ import annotations

from .builder import (
    CODE_SUGGESTIONS,
    GENERIC_SUGGESTIONS,
    MESSAGE_RULES,
    SuggestionEngine,
    SuggestionRule,
)

__all__ = [
    "CODE_SUGGESTIONS",
    "GENERIC_SUGGESTIONS",
    "MESSAGE_RULES",
    "SuggestionEngine",
    "SuggestionRule",
]
