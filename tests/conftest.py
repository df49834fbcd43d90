# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

FORGE_FAILURE_OUTPUT = """\
Compiling 1 files with Solc 0.8.30
Solc 0.8.30 finished in 12.34ms
Error: Compiler run failed:
Error (2314): Expected ';' but got '}'
  --> src/Counter.sol:10:5:
   |
10 |     uint256 count = 1
   |     ^^^^^^^^^^^^^^^^^
Warning (5667): Unused function parameter. Remove or comment out the variable name to silence this warning.
  --> src/Counter.sol:14:22:
   |
14 |     function set(uint256 value) public {}
   |                  ^^^^^^^^^^^^^
"""


@pytest.fixture
def forge_failure_output() -> str:
    """Return captured ``forge build`` output with one error and one warning."""
    return FORGE_FAILURE_OUTPUT


@pytest.fixture
def solc_structured_payload() -> dict[str, object]:
    """Return a compiler-service response with solc standard-JSON style entries."""
    return {
        "success": False,
        "contractName": "Counter",
        "errors": [
            {
                "severity": "error",
                "errorCode": "7576",
                "message": "Undeclared identifier.",
                "formattedMessage": "DeclarationError: Undeclared identifier.\n --> src/Counter.sol:8:9:",
                "sourceLocation": {"file": "src/Counter.sol", "start": {"line": 8, "column": 9}},
            },
        ],
        "warnings": [
            {
                "severity": "warning",
                "errorCode": "2072",
                "message": "Unused local variable.",
                "file": "src/Counter.sol",
                "line": 12,
                "column": 5,
            },
        ],
    }


@pytest.fixture(autouse=True)
def reset_soldiag_logger() -> Iterator[None]:
    """Drop handlers installed by ``--verbose`` so captured streams do not leak between tests."""
    logger = logging.getLogger("soldiag")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
    if hasattr(logger, "_soldiag_verbose_configured"):
        delattr(logger, "_soldiag_verbose_configured")
