# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Remediation suggestion builders.

This module centralises the heuristics that translate normalised compiler
diagnostics into human-friendly hints.  Message rules are evaluated
independently and in a fixed order, so the suggestion list for a given
diagnostic is reproducible; known diagnostic codes add fixed hints from a
lookup table that configuration can extend.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from string import Template
from typing import Final

from ..config import DEFAULT_CONFIG, NormalizerConfig
from ..models import Diagnostic
from ..severity import Severity

MessagePredicate = Callable[[str], bool]

MISSING_LINE_LABEL: Final[str] = "unknown"


@dataclass(frozen=True)
class SuggestionRule:
    """A message predicate paired with the hints it contributes."""

    matches: MessagePredicate
    templates: tuple[str, ...]


def _contains_all(*tokens: str) -> MessagePredicate:
    return lambda message: all(token in message for token in tokens)


def _contains_any(*tokens: str) -> MessagePredicate:
    return lambda message: any(token in message for token in tokens)


def _word(pattern: str) -> MessagePredicate:
    compiled = re.compile(pattern)
    return lambda message: compiled.search(message) is not None


MESSAGE_RULES: Final[tuple[SuggestionRule, ...]] = (
    SuggestionRule(
        _contains_all("expected", "but got"),
        (
            "Check the syntax at the specified location",
            "Ensure proper punctuation (semicolons, commas, brackets)",
        ),
    ),
    SuggestionRule(
        _contains_any("semicolon"),
        (
            "Add semicolon (;) at the end of the statement",
            "Check line $line for missing semicolon",
        ),
    ),
    SuggestionRule(
        _contains_any("bracket", "brace"),
        (
            "Check for matching opening and closing brackets/braces",
            "Ensure all { } and ( ) are properly paired",
        ),
    ),
    SuggestionRule(
        _contains_all("type", "not"),
        (
            "Check variable types and ensure they match",
            "Verify function parameter and return types",
        ),
    ),
    SuggestionRule(
        _contains_any("not found", "undefined", "undeclared"),
        (
            "Check spelling of variable/function names",
            "Ensure all variables are declared before use",
        ),
    ),
    SuggestionRule(
        _contains_any("visibility"),
        ("Add visibility specifier: public, private, internal, or external",),
    ),
    SuggestionRule(
        _contains_any("pragma"),
        (
            "Make sure you have a valid pragma statement at the top of your contract",
            "Example: pragma solidity ^0.8.30;",
        ),
    ),
    SuggestionRule(
        _word(r"\bcontracts?\b"),
        (
            "Check that your contract declaration is correct",
            "Example: contract MyContract { ... }",
        ),
    ),
    SuggestionRule(
        _word(r"\bfunctions?\b"),
        (
            "Check function declaration syntax",
            "Ensure proper parameter and return type declarations",
        ),
    ),
    SuggestionRule(
        _word(r"\bvariables?\b"),
        (
            "Check variable declarations and types",
            "Example: uint256 public myVariable;",
        ),
    ),
    SuggestionRule(
        _word(r"\bimports?\b"),
        (
            "Verify import statements are correct",
            'Example: import "@openzeppelin/contracts/token/ERC20/ERC20.sol";',
        ),
    ),
    SuggestionRule(
        _word(r"\boverrid(?:e|es|ing)\b"),
        ("Add override keyword when overriding functions from parent contracts",),
    ),
    SuggestionRule(
        _contains_any("payable"),
        ("Add payable modifier to functions that should receive Ether",),
    ),
    SuggestionRule(
        _word(r"\b(?:view|pure)\b"),
        ("Add view or pure modifiers to functions that don't modify state",),
    ),
    SuggestionRule(
        _word(r"\breturn(?:s|ed)?\b"),
        ("Check return statements match function return types",),
    ),
    SuggestionRule(
        _contains_any("data location", "memory", "storage", "calldata"),
        ("Specify data location for complex types: memory, storage, or calldata",),
    ),
    SuggestionRule(
        _word(r"\bconstructors?\b"),
        (
            "Check constructor syntax and parameters",
            "Example: constructor(uint256 _param) { ... }",
        ),
    ),
    SuggestionRule(
        _word(r"\bmodifiers?\b"),
        (
            "Verify modifier syntax and usage",
            "Example: modifier onlyOwner() { require(msg.sender == owner); _; }",
        ),
    ),
    SuggestionRule(
        _word(r"\bevents?\b"),
        (
            "Check event name spelling",
            "Ensure event is declared before use",
        ),
    ),
)

CODE_SUGGESTIONS: Final[dict[str, tuple[str, ...]]] = {
    "1878": ("Add an SPDX license identifier, e.g. // SPDX-License-Identifier: MIT",),
    "2018": ("Function state mutability can be restricted - mark it view or pure",),
    "2072": ("Unused local variable - remove it or use it",),
    "2314": ("Missing semicolon - add ; at the end of the statement",),
    "3420": ("Add a pragma solidity version statement at the top of the file",),
    "4937": ("No visibility specified - add public, private, internal, or external",),
    "5667": ("Unused function parameter - remove or comment out the parameter name",),
    "7576": ("Undeclared identifier - declare it or fix its spelling before use",),
    "7920": ("Identifier not found or not unique - check the name and its imports",),
}

GENERIC_SUGGESTIONS: Final[tuple[str, ...]] = (
    "Check the syntax around line $line",
    "Review the $toolchain documentation for proper syntax",
)


class _SuggestionAccumulator:
    """Accumulator that drops repeated hints while preserving order."""

    def __init__(self, substitutions: Mapping[str, str]) -> None:
        self._substitutions = substitutions
        self._seen: set[str] = set()
        self._entries: list[str] = []

    @property
    def entries(self) -> tuple[str, ...]:
        """Return the hints accumulated so far."""
        return tuple(self._entries)

    def extend(self, templates: Iterable[str]) -> None:
        """Render and add ``templates`` unless already present."""
        for template in templates:
            text = Template(template).safe_substitute(self._substitutions)
            if text in self._seen:
                continue
            self._seen.add(text)
            self._entries.append(text)


class SuggestionEngine:
    """Reusable façade mapping diagnostics to remediation hints."""

    def __init__(
        self,
        *,
        config: NormalizerConfig = DEFAULT_CONFIG,
        rules: Sequence[SuggestionRule] = MESSAGE_RULES,
    ) -> None:
        """Create an engine using ``rules`` and the configured code table.

        Args:
            config: Configuration supplying extra code hints, the toolchain
                name, and whether warnings receive hints.
            rules: Ordered message rules evaluated for every diagnostic.
        """

        self._config = config
        self._rules = tuple(rules)
        self._code_table: dict[str, tuple[str, ...]] = {**CODE_SUGGESTIONS, **config.code_suggestions}

    def suggest(self, diagnostic: Diagnostic) -> tuple[str, ...]:
        """Return the ordered hints for ``diagnostic``.

        Errors always receive at least the generic hints; warnings receive
        rule hints only when enabled; informational diagnostics receive none.
        """

        if diagnostic.severity is Severity.INFO:
            return ()
        if diagnostic.severity is Severity.WARNING and not self._config.suggest_for_warnings:
            return ()

        accumulator = _SuggestionAccumulator(
            {
                "line": str(diagnostic.line) if diagnostic.line else MISSING_LINE_LABEL,
                "toolchain": self._config.toolchain_name,
            },
        )
        message = diagnostic.message.lower()
        for rule in self._rules:
            if rule.matches(message):
                accumulator.extend(rule.templates)
        accumulator.extend(self._code_table.get(diagnostic.code, ()))

        if not accumulator.entries and diagnostic.severity is Severity.ERROR:
            accumulator.extend(GENERIC_SUGGESTIONS)
        return accumulator.entries

    def enrich(self, diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
        """Return copies of ``diagnostics`` carrying their suggestions."""

        return [diag.with_suggestions(self.suggest(diag)) for diag in diagnostics]


__all__ = [
    "CODE_SUGGESTIONS",
    "GENERIC_SUGGESTIONS",
    "MESSAGE_RULES",
    "SuggestionEngine",
    "SuggestionRule",
]
