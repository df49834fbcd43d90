# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting diagnostic collections to serializable data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .models import UNKNOWN_CODE, UNKNOWN_FILE, Diagnostic, DiagnosticCollection
from .severity import Severity

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]
type SerializableMapping = dict[str, JsonValue]


def serialize_diagnostic(diag: Diagnostic, *, include_raw: bool = False) -> SerializableMapping:
    """Convert a diagnostic into the JSON-friendly output contract.

    Args:
        diag: Diagnostic to serialize.
        include_raw: When ``True`` the originating ``raw_text`` is included.

    Returns:
        SerializableMapping: Mapping with the stable diagnostic keys.
    """
    payload: SerializableMapping = {
        "severity": diag.severity.value,
        "file": diag.file,
        "line": diag.line,
        "column": diag.column,
        "code": diag.code,
        "message": diag.message,
        "suggestions": list(diag.suggestions),
    }
    if include_raw:
        payload["raw_text"] = diag.raw_text
    return payload


def serialize_collection(collection: DiagnosticCollection, *, include_raw: bool = False) -> SerializableMapping:
    """Serialize a collection as ``{success, errors, warnings, message}``."""
    return {
        "success": collection.success,
        "errors": [serialize_diagnostic(diag, include_raw=include_raw) for diag in collection.errors],
        "warnings": [serialize_diagnostic(diag, include_raw=include_raw) for diag in collection.warnings],
        "message": collection.summary_message,
    }


def deserialize_collection(data: Mapping[str, JsonValue]) -> DiagnosticCollection:
    """Rehydrate a :class:`DiagnosticCollection` from its serialized form.

    Diagnostics are reassigned to the bucket they were stored under, so a
    persisted collection keeps its error/warning partition.
    """
    errors = tuple(_deserialize_diagnostic(entry, Severity.ERROR) for entry in _iter_entries(data.get("errors")))
    warnings = tuple(
        _deserialize_diagnostic(entry, Severity.WARNING) for entry in _iter_entries(data.get("warnings"))
    )
    return DiagnosticCollection(
        success=bool(data.get("success", not errors)),
        errors=errors,
        warnings=warnings,
        summary_message=str(data.get("message", "")),
    )


def _deserialize_diagnostic(entry: Mapping[str, JsonValue], severity: Severity) -> Diagnostic:
    suggestions = entry.get("suggestions")
    return Diagnostic(
        severity=severity,
        file=coerce_optional_str(entry.get("file")) or UNKNOWN_FILE,
        line=max(safe_int(entry.get("line")), 0),
        column=max(safe_int(entry.get("column")), 0),
        code=coerce_optional_str(entry.get("code")) or UNKNOWN_CODE,
        message=str(entry.get("message", "")),
        raw_text=str(entry.get("raw_text", "")),
        suggestions=tuple(str(item) for item in suggestions) if isinstance(suggestions, list) else (),
    )


def _iter_entries(value: JsonValue | None) -> list[Mapping[str, JsonValue]]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def safe_int(value: object, default: int = 0) -> int:
    """Return ``value`` as ``int`` when possible, otherwise ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def coerce_optional_int(value: object) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_optional_str(value: object) -> str | None:
    """Return a stripped string representation of ``value`` or ``None`` when unset."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "JsonValue",
    "SerializableMapping",
    "coerce_optional_int",
    "coerce_optional_str",
    "deserialize_collection",
    "safe_int",
    "serialize_collection",
    "serialize_diagnostic",
]
