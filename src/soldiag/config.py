# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for the diagnostic normalizer."""

from __future__ import annotations

import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import UNKNOWN_CODE, UNKNOWN_FILE

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
CONFIG_SECTION_KEY: Final[str] = "soldiag"
DEFAULT_SOURCE_ROOTS: Final[tuple[str, ...]] = ("src/",)


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class NormalizerConfig(BaseModel):
    """Knobs controlling path display, noise filtering, and suggestions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_roots: tuple[str, ...] = DEFAULT_SOURCE_ROOTS
    unknown_file: str = UNKNOWN_FILE
    unknown_code: str = UNKNOWN_CODE
    noise_patterns: tuple[str, ...] = Field(default_factory=tuple)
    suggest_for_warnings: bool = True
    toolchain_name: str = "Solidity"
    code_suggestions: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("source_roots", mode="after")
    @classmethod
    def _normalise_roots(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Store roots with forward slashes and a single trailing separator."""
        roots: list[str] = []
        for root in value:
            cleaned = root.replace("\\", "/").strip()
            if not cleaned:
                continue
            roots.append(cleaned.rstrip("/") + "/")
        return tuple(roots)

    @field_validator("noise_patterns", mode="after")
    @classmethod
    def _validate_noise_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Reject noise patterns that are not valid regular expressions."""
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid noise pattern {pattern!r}: {exc}") from exc
        return value

    def compiled_noise_patterns(self) -> tuple[re.Pattern[str], ...]:
        """Return the configured noise patterns compiled case-insensitively."""
        return tuple(re.compile(pattern, re.IGNORECASE) for pattern in self.noise_patterns)


DEFAULT_CONFIG: Final[NormalizerConfig] = NormalizerConfig()


def build_config(data: Mapping[str, Any]) -> NormalizerConfig:
    """Validate ``data`` into a :class:`NormalizerConfig`.

    Args:
        data: Mapping of configuration keys, typically parsed from TOML.

    Returns:
        NormalizerConfig: Validated configuration.

    Raises:
        ConfigError: If ``data`` contains unknown keys or invalid values.
    """

    normalised = {str(key).replace("-", "_"): value for key, value in data.items()}
    try:
        return NormalizerConfig.model_validate(normalised)
    except ValidationError as exc:
        raise ConfigError(f"invalid soldiag configuration: {exc}") from exc


def load_config(path: Path) -> NormalizerConfig:
    """Load configuration from a TOML document.

    ``pyproject.toml`` files are read from ``[tool.soldiag]``; any other TOML
    file may either nest its settings under ``[soldiag]`` or declare them at
    the top level.

    Args:
        path: TOML file to read.

    Returns:
        NormalizerConfig: Configuration described by ``path``.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"configuration file not found: {path}") from exc
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"unable to read configuration at {path}: {exc}") from exc

    if path.name == PYPROJECT_FILENAME:
        tool_section = document.get(PYPROJECT_TOOL_KEY)
        section = tool_section.get(CONFIG_SECTION_KEY) if isinstance(tool_section, Mapping) else None
        if section is None:
            return DEFAULT_CONFIG
    else:
        section = document.get(CONFIG_SECTION_KEY, document)
    if not isinstance(section, Mapping):
        raise ConfigError(f"configuration at {path} must be a table")
    return build_config(section)


__all__ = [
    "CONFIG_SECTION_KEY",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DEFAULT_SOURCE_ROOTS",
    "NormalizerConfig",
    "build_config",
    "load_config",
]
