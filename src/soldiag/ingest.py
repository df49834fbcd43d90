# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shape detection for upstream compiler-service payloads.

Upstream responses arrive either as structured JSON carrying ``errors`` and
``warnings`` entry arrays, or as raw toolchain output (optionally alongside
plain-string ``errors``/``warnings`` arrays).  :func:`detect_shape` decides
once which of the two representations applies so that later stages never
sniff the payload again.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel

from .config import DEFAULT_CONFIG, NormalizerConfig
from .paths import display_path
from .serialization import coerce_optional_int, coerce_optional_str
from .severity import Severity

ERRORS_KEY: Final[str] = "errors"
WARNINGS_KEY: Final[str] = "warnings"
SUCCESS_KEY: Final[str] = "success"
RESULT_KEY: Final[str] = "result"
TEXT_KEYS: Final[tuple[str, ...]] = ("output", "stdout", "stderr")
EXIT_CODE_KEYS: Final[tuple[str, ...]] = ("exit_code", "exitCode", "returncode")
CONTRACT_NAME_KEYS: Final[tuple[str, ...]] = ("contractName", "contract_name")
PAYLOAD_ATTRIBUTES: Final[tuple[str, ...]] = (
    ERRORS_KEY,
    WARNINGS_KEY,
    SUCCESS_KEY,
    *TEXT_KEYS,
    *EXIT_CODE_KEYS,
    *CONTRACT_NAME_KEYS,
)
SOURCE_SUFFIX: Final[str] = ".sol"

_CONTRACT_DECLARATION: Final[re.Pattern[str]] = re.compile(r"\bcontract\s+([A-Za-z_$][\w$]*)")


@dataclass(frozen=True, slots=True)
class TextLine:
    """A trimmed, non-empty line of toolchain output and the bucket it came from."""

    text: str
    origin: Severity | None = None


@dataclass(frozen=True, slots=True)
class StructuredEntry:
    """A pre-structured diagnostic entry together with its carrying bucket."""

    bucket: Severity
    data: Mapping[str, object]


@dataclass(frozen=True, slots=True)
class Structured:
    """Payload whose diagnostics were already structured upstream.

    Plain-string items sharing the ``errors``/``warnings`` arrays with structured
    entries are kept in ``lines`` so they are parsed rather than lost.
    """

    entries: tuple[StructuredEntry, ...]
    explicit_signal: bool | None
    fallback_file: str
    lines: tuple[TextLine, ...] = ()


@dataclass(frozen=True, slots=True)
class RawText:
    """Payload that only carries raw toolchain output lines."""

    lines: tuple[TextLine, ...]
    explicit_signal: bool | None
    fallback_file: str


type PayloadShape = Structured | RawText


def detect_shape(
    payload: object,
    *,
    config: NormalizerConfig = DEFAULT_CONFIG,
    fallback_file: str | None = None,
) -> PayloadShape:
    """Classify ``payload`` as :class:`Structured` or :class:`RawText`.

    Args:
        payload: Upstream response of unknown shape.
        config: Normalizer configuration (source roots and sentinels).
        fallback_file: Location assigned to diagnostics lacking one; derived
            from the payload's contract name when omitted.

    Returns:
        PayloadShape: Tagged representation consumed by the parsing stage.
    """

    if isinstance(payload, (bytes, bytearray)):
        payload = bytes(payload).decode("utf-8", errors="replace")
    if isinstance(payload, str):
        fallback = _resolve_fallback(fallback_file, None, config)
        return RawText(tuple(_text_lines(payload, None)), None, fallback)

    data = _as_mapping(payload)
    if data is None:
        return RawText((), None, _resolve_fallback(fallback_file, None, config))

    data = _unwrap_envelope(data)
    signal = extract_exit_signal(data)
    fallback = _resolve_fallback(fallback_file, data, config)

    array_lines = [
        *_text_lines(_string_items(data.get(WARNINGS_KEY)), Severity.WARNING),
        *_text_lines(_string_items(data.get(ERRORS_KEY)), Severity.ERROR),
    ]
    entries = tuple(_structured_entries(data))
    if entries:
        return Structured(entries, signal, fallback, tuple(array_lines))

    lines: list[TextLine] = []
    for key in TEXT_KEYS:
        lines.extend(_text_lines(data.get(key), None))
    lines.extend(array_lines)
    return RawText(tuple(lines), signal, fallback)


def extract_exit_signal(data: Mapping[str, object]) -> bool | None:
    """Return the upstream success signal, or ``None`` when none was reported.

    ``success`` must be a real boolean; exit codes count as success when zero.
    When both are present the signal is their conjunction.
    """

    signals: list[bool] = []
    success = data.get(SUCCESS_KEY)
    if isinstance(success, bool):
        signals.append(success)
    for key in EXIT_CODE_KEYS:
        exit_code = coerce_optional_int(data.get(key))
        if exit_code is not None:
            signals.append(exit_code == 0)
            break
    if not signals:
        return None
    return all(signals)


def contract_name_from_source(source: str) -> str | None:
    """Return the first contract name declared in ``source``, if any."""

    match = _CONTRACT_DECLARATION.search(source)
    return match.group(1) if match else None


def _as_mapping(payload: object) -> Mapping[str, object] | None:
    if isinstance(payload, Mapping):
        return {str(key): value for key, value in payload.items()}
    if isinstance(payload, BaseModel):
        return payload.model_dump()
    present = {name: getattr(payload, name) for name in PAYLOAD_ATTRIBUTES if hasattr(payload, name)}
    return present or None


def _unwrap_envelope(data: Mapping[str, object]) -> Mapping[str, object]:
    """Merge a nested ``result`` object into ``data``; top-level values win when set."""

    inner = data.get(RESULT_KEY)
    if not isinstance(inner, Mapping):
        return data
    merged: dict[str, object] = {str(key): value for key, value in inner.items()}
    for key, value in data.items():
        if key == RESULT_KEY or value is None:
            continue
        if key in merged and isinstance(value, (list, tuple)) and not value:
            continue
        merged[key] = value
    return merged


def _structured_entries(data: Mapping[str, object]) -> Iterator[StructuredEntry]:
    for key, bucket in ((ERRORS_KEY, Severity.ERROR), (WARNINGS_KEY, Severity.WARNING)):
        for item in _sequence_items(data.get(key)):
            if isinstance(item, Mapping):
                yield StructuredEntry(bucket, {str(name): value for name, value in item.items()})
            elif isinstance(item, BaseModel):
                yield StructuredEntry(bucket, item.model_dump())


def _sequence_items(value: object) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    return ()


def _string_items(value: object) -> list[str]:
    return [item for item in _sequence_items(value) if isinstance(item, str)]


def _text_lines(value: object, origin: Severity | None) -> Iterator[TextLine]:
    if isinstance(value, str):
        chunks: Sequence[object] = (value,)
    else:
        chunks = _sequence_items(value)
    for chunk in chunks:
        if not isinstance(chunk, str):
            continue
        for raw_line in chunk.splitlines():
            trimmed = raw_line.strip()
            if trimmed:
                yield TextLine(trimmed, origin)


def _resolve_fallback(
    explicit: str | None,
    data: Mapping[str, object] | None,
    config: NormalizerConfig,
) -> str:
    candidate = coerce_optional_str(explicit)
    if candidate is None and data is not None:
        for key in CONTRACT_NAME_KEYS:
            name = coerce_optional_str(data.get(key))
            if name:
                candidate = name if name.endswith(SOURCE_SUFFIX) else f"{name}{SOURCE_SUFFIX}"
                break
    return display_path(candidate, source_roots=config.source_roots, unknown=config.unknown_file)


__all__ = [
    "PayloadShape",
    "RawText",
    "Structured",
    "StructuredEntry",
    "TextLine",
    "contract_name_from_source",
    "detect_shape",
    "extract_exit_signal",
]
