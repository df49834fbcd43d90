# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different toolchain vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_SEVERITY_ALIASES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "fatal": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "info": Severity.INFO,
    "information": Severity.INFO,
    "note": Severity.INFO,
    "notice": Severity.INFO,
}

_ERROR_SUFFIX: Final[str] = "error"


def severity_from_label(label: object, default: Severity | None = None) -> Severity | None:
    """Return the :class:`Severity` described by a toolchain label.

    ``solc`` reports error classes such as ``TypeError`` or ``ParserError``;
    any label ending in ``error`` therefore maps to :attr:`Severity.ERROR`.

    Args:
        label: Raw severity label, enum member, or ``None``.
        default: Value returned when ``label`` is not recognised.

    Returns:
        Severity | None: Coerced severity or ``default``.
    """

    if isinstance(label, Severity):
        return label
    if not isinstance(label, str):
        return default
    token = label.strip().lower()
    if not token:
        return default
    if token in _SEVERITY_ALIASES:
        return _SEVERITY_ALIASES[token]
    if token.endswith(_ERROR_SUFFIX):
        return Severity.ERROR
    return default


__all__ = ["Severity", "severity_from_label"]
