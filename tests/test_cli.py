# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the soldiag command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from soldiag.cli.app import app, parse_payload


def test_normalize_file_reports_json(tmp_path: Path, forge_failure_output: str) -> None:
    runner = CliRunner()
    payload = tmp_path / "build.log"
    payload.write_text(forge_failure_output, encoding="utf-8")

    result = runner.invoke(app, ["normalize", str(payload), "--format", "json"])

    assert result.exit_code == 1
    document = json.loads(result.stdout)
    assert document["success"] is False
    assert document["errors"][0]["file"] == "Counter.sol"
    assert document["errors"][0]["code"] == "2314"
    assert document["warnings"][0]["code"] == "5667"
    assert "raw_text" not in document["errors"][0]


def test_normalize_reads_json_from_stdin() -> None:
    runner = CliRunner()
    payload = {"errors": [], "warnings": [{"message": "Unused local variable."}], "success": True}

    result = runner.invoke(app, ["normalize", "-"], input=json.dumps(payload))

    assert result.exit_code == 0
    assert json.loads(result.stdout)["message"] == "Compilation completed with 1 warning(s)"


def test_normalize_source_root_override() -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["normalize", "--source-root", "contracts"],
        input="contracts/token/A.sol:1:1: Error: boom\n",
    )

    assert result.exit_code == 1
    assert json.loads(result.stdout)["errors"][0]["file"] == "token/A.sol"


def test_normalize_derives_fallback_from_contract_source(tmp_path: Path) -> None:
    runner = CliRunner()
    source = tmp_path / "Vault.sol"
    source.write_text("pragma solidity ^0.8.30;\ncontract Vault {}\n", encoding="utf-8")

    result = runner.invoke(app, ["normalize", "--source", str(source)], input="Error: boom\n")

    assert result.exit_code == 1
    assert json.loads(result.stdout)["errors"][0]["file"] == "Vault.sol"


def test_normalize_explicit_fallback_file() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "--fallback-file", "Token.sol"], input="Error: boom\n")

    assert json.loads(result.stdout)["errors"][0]["file"] == "Token.sol"


def test_normalize_missing_payload_exits_with_input_error(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["normalize", str(tmp_path / "missing.json"), "--no-emoji"])

    assert result.exit_code == 2
    assert "unable to read payload" in result.stdout


def test_normalize_invalid_config_exits_with_input_error(tmp_path: Path) -> None:
    runner = CliRunner()
    config = tmp_path / "soldiag.toml"
    config.write_text("unknown_option = true\n", encoding="utf-8")

    result = runner.invoke(app, ["normalize", "--config", str(config)], input="Error: boom\n")

    assert result.exit_code == 2
    assert "invalid soldiag configuration" in result.stdout


def test_normalize_config_file_is_applied(tmp_path: Path) -> None:
    runner = CliRunner()
    config = tmp_path / "soldiag.toml"
    config.write_text('[soldiag]\nunknown_file = "<input>"\n', encoding="utf-8")

    result = runner.invoke(app, ["normalize", "--config", str(config)], input="Error: boom\n")

    assert json.loads(result.stdout)["errors"][0]["file"] == "<input>"


def test_normalize_table_format(tmp_path: Path, forge_failure_output: str) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["normalize", "--format", "table", "--no-color", "--no-emoji"],
        input=forge_failure_output,
    )

    assert result.exit_code == 1
    assert "Compilation failed with 1 error(s)" in result.stdout


def test_normalize_table_success_summary() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "--format", "table", "--no-emoji"], input="Compiler run successful!\n")

    assert result.exit_code == 0
    assert "Compilation completed" in result.stdout


def test_verbose_streams_debug_logging() -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["normalize", "--verbose", "--format", "table", "--no-emoji"],
        input="src/A.sol:1:1: Error: boom\n",
    )

    assert result.exit_code == 1
    assert "normalized 1 candidate(s)" in result.output


def test_help_lists_normalize_command() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "normalize" in result.stdout


def test_parse_payload_prefers_json_and_falls_back_to_text() -> None:
    assert parse_payload('{"success": true}') == {"success": True}
    assert parse_payload("Error: boom") == "Error: boom"
    assert parse_payload("{not json") == "{not json"


def test_source_without_contract_warns_in_table_mode(tmp_path: Path) -> None:
    runner = CliRunner()
    source = tmp_path / "Math.sol"
    source.write_text("library Math {}\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["normalize", "--source", str(source), "--format", "table", "--no-emoji"],
        input="Error: boom\n",
    )

    assert result.exit_code == 1
    assert "No contract declaration found" in result.stdout
