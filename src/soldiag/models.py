# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the soldiag package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

UNKNOWN_FILE = "unknown"
UNKNOWN_CODE = "UNKNOWN"


class RawDiagnostic(BaseModel):
    """Intermediate diagnostic that resembles toolchain-native structure."""

    model_config = ConfigDict(validate_assignment=True)

    severity: Severity
    message: str
    file: str | None = None
    line: int | None = None
    column: int | None = None
    code: str | None = None
    raw_text: str = ""


class Diagnostic(BaseModel):
    """Normalized compiler diagnostic surfaced to callers."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    file: str = UNKNOWN_FILE
    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)
    code: str = UNKNOWN_CODE
    message: str
    raw_text: str = ""
    suggestions: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def has_location(self) -> bool:
        """Return ``True`` when the diagnostic points at a concrete line."""
        return self.line > 0

    def with_suggestions(self, suggestions: tuple[str, ...]) -> Diagnostic:
        """Return a copy of the diagnostic carrying ``suggestions``."""
        return self.model_copy(update={"suggestions": tuple(suggestions)})


class DiagnosticCollection(BaseModel):
    """Immutable result of a single normalization call."""

    model_config = ConfigDict(frozen=True)

    success: bool
    errors: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    warnings: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    infos: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    summary_message: str
    explicit_signal: bool | None = None
