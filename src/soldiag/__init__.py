# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalize smart-contract compiler output into structured diagnostics."""

from __future__ import annotations

from .config import ConfigError, NormalizerConfig, load_config
from .diagnostics import DiagnosticPipeline, normalize
from .ingest import contract_name_from_source
from .models import Diagnostic, DiagnosticCollection
from .serialization import serialize_collection, serialize_diagnostic
from .severity import Severity

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCollection",
    "DiagnosticPipeline",
    "NormalizerConfig",
    "Severity",
    "contract_name_from_source",
    "load_config",
    "normalize",
    "serialize_collection",
    "serialize_diagnostic",
]
