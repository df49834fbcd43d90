# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration models and loaders."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from soldiag.config import DEFAULT_CONFIG, ConfigError, NormalizerConfig, build_config, load_config


def test_defaults() -> None:
    assert DEFAULT_CONFIG.source_roots == ("src/",)
    assert DEFAULT_CONFIG.unknown_file == "unknown"
    assert DEFAULT_CONFIG.unknown_code == "UNKNOWN"
    assert DEFAULT_CONFIG.suggest_for_warnings is True


def test_source_roots_are_normalised() -> None:
    config = NormalizerConfig(source_roots=("contracts", "lib\\deps//", "  "))

    assert config.source_roots == ("contracts/", "lib/deps/")


def test_invalid_noise_pattern_is_rejected() -> None:
    with pytest.raises(ValidationError):
        NormalizerConfig(noise_patterns=("([unclosed",))


def test_build_config_accepts_dashed_keys() -> None:
    config = build_config({"source-roots": ["contracts"], "suggest-for-warnings": False})

    assert config.source_roots == ("contracts/",)
    assert config.suggest_for_warnings is False


def test_build_config_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError):
        build_config({"colour": "blue"})


def test_load_config_from_pyproject(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        '[tool.soldiag]\nsource_roots = ["contracts/"]\ntoolchain_name = "solc"\n'
        '[tool.soldiag.code_suggestions]\n"9999" = ["Custom hint"]\n',
        encoding="utf-8",
    )

    config = load_config(pyproject)

    assert config.source_roots == ("contracts/",)
    assert config.toolchain_name == "solc"
    assert config.code_suggestions == {"9999": ("Custom hint",)}


def test_pyproject_without_section_uses_defaults(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert load_config(pyproject) == DEFAULT_CONFIG


def test_standalone_file_with_section_or_top_level(tmp_path: Path) -> None:
    sectioned = tmp_path / "soldiag.toml"
    sectioned.write_text('[soldiag]\nunknown_file = "<input>"\n', encoding="utf-8")
    flat = tmp_path / "flat.toml"
    flat.write_text('unknown_code = "N/A"\n', encoding="utf-8")

    assert load_config(sectioned).unknown_file == "<input>"
    assert load_config(flat).unknown_code == "N/A"


@pytest.mark.parametrize(
    "content",
    [
        "this is = = not toml",
        'noise_patterns = ["([unclosed"]\n',
        "soldiag = 3\n",
    ],
)
def test_load_config_errors(tmp_path: Path, content: str) -> None:
    path = tmp_path / "soldiag.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "absent.toml")
