# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Composable diagnostic processing pipeline and the ``normalize`` entry point."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..advice import SuggestionEngine
from ..config import DEFAULT_CONFIG, NormalizerConfig
from ..ingest import PayloadShape, Structured, detect_shape
from ..models import Diagnostic, DiagnosticCollection, RawDiagnostic
from ..parsers import parse_entries, parse_lines
from ..severity import Severity
from .core import dedupe_diagnostics, normalize_diagnostics
from .verdict import Verdict, classify

LOGGER = logging.getLogger(__name__)

ShapeDetector = Callable[[object, NormalizerConfig, str | None], PayloadShape]
Extractor = Callable[[PayloadShape, NormalizerConfig], list[RawDiagnostic]]
Canonicalizer = Callable[[Sequence[RawDiagnostic], NormalizerConfig], list[Diagnostic]]
Deduper = Callable[[Sequence[Diagnostic]], list[Diagnostic]]
Classifier = Callable[[Sequence[Diagnostic], Sequence[Diagnostic], bool | None], Verdict]


def _default_detector(payload: object, config: NormalizerConfig, fallback_file: str | None) -> PayloadShape:
    """Return the tagged payload shape using the default detector."""
    return detect_shape(payload, config=config, fallback_file=fallback_file)


def _default_extractor(shape: PayloadShape, config: NormalizerConfig) -> list[RawDiagnostic]:
    """Dispatch ``shape`` to the structured or raw-text parser."""
    if isinstance(shape, Structured):
        return [
            *parse_entries(shape.entries, config=config, fallback_file=shape.fallback_file),
            *parse_lines(shape.lines, config=config, fallback_file=shape.fallback_file),
        ]
    return parse_lines(shape.lines, config=config, fallback_file=shape.fallback_file)


def _default_canonicalizer(candidates: Sequence[RawDiagnostic], config: NormalizerConfig) -> list[Diagnostic]:
    return normalize_diagnostics(candidates, config=config)


def _default_deduper(diagnostics: Sequence[Diagnostic]) -> list[Diagnostic]:
    return dedupe_diagnostics(diagnostics)


@dataclass(slots=True)
class DiagnosticPipeline:
    """Pipeline turning an upstream payload into a :class:`DiagnosticCollection`.

    Attributes:
        config: Normalizer configuration shared by every stage.
        detect: Callable classifying the payload shape.
        extract: Callable producing raw candidates from the shape.
        canonicalize: Callable converting raw candidates into diagnostics.
        dedupe: Callable removing duplicate diagnostics.
        classify: Callable deciding the verdict.
    """

    config: NormalizerConfig = DEFAULT_CONFIG
    detect: ShapeDetector = _default_detector
    extract: Extractor = _default_extractor
    canonicalize: Canonicalizer = _default_canonicalizer
    dedupe: Deduper = _default_deduper
    classify: Classifier = classify
    suggestions: SuggestionEngine = field(init=False)

    def __post_init__(self) -> None:
        self.suggestions = SuggestionEngine(config=self.config)

    def run(self, payload: object, *, fallback_file: str | None = None) -> DiagnosticCollection:
        """Execute every stage and return the assembled collection.

        Args:
            payload: Upstream payload of unknown shape.
            fallback_file: File assigned to diagnostics without a location.

        Returns:
            DiagnosticCollection: Immutable, partitioned result with its verdict.
        """

        shape = self.detect(payload, self.config, fallback_file)
        candidates = self.extract(shape, self.config)
        diagnostics = self.dedupe(self.canonicalize(candidates, self.config))
        enriched = self.suggestions.enrich(diagnostics)

        errors = tuple(diag for diag in enriched if diag.severity is Severity.ERROR)
        warnings = tuple(diag for diag in enriched if diag.severity is Severity.WARNING)
        infos = tuple(diag for diag in enriched if diag.severity is Severity.INFO)
        verdict = self.classify(errors, warnings, shape.explicit_signal)
        LOGGER.debug(
            "normalized %d candidate(s) into %d error(s), %d warning(s), %d info(s)",
            len(candidates),
            len(errors),
            len(warnings),
            len(infos),
        )
        return DiagnosticCollection(
            success=verdict.success,
            errors=errors,
            warnings=warnings,
            infos=infos,
            summary_message=verdict.summary_message,
            explicit_signal=shape.explicit_signal,
        )


def normalize(
    payload: object,
    *,
    config: NormalizerConfig | None = None,
    fallback_file: str | None = None,
) -> DiagnosticCollection:
    """Normalize an upstream compiler payload into a :class:`DiagnosticCollection`.

    This is the only entry point callers need.  It never raises for malformed
    input: unrecognised lines and entries are dropped, and an unrecognised
    payload yields an empty, successful collection.

    Args:
        payload: Structured mapping/model, raw text, bytes, or ``None``.
        config: Optional configuration; defaults to :data:`DEFAULT_CONFIG`.
        fallback_file: File assigned to diagnostics without a location.

    Returns:
        DiagnosticCollection: Deduplicated, suggestion-enriched diagnostics.
    """

    pipeline = DiagnosticPipeline(config=config or DEFAULT_CONFIG)
    return pipeline.run(payload, fallback_file=fallback_file)


__all__ = ["DiagnosticPipeline", "normalize"]
