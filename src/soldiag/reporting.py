# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering for normalized diagnostic collections."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from .console import get_console_manager
from .logging import fail, ok, section
from .models import Diagnostic, DiagnosticCollection
from .severity import Severity

_SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


def render_collection(
    collection: DiagnosticCollection,
    *,
    verbose: bool = False,
    use_color: bool = True,
    use_emoji: bool = True,
) -> None:
    """Render ``collection`` as a diagnostics table followed by its verdict.

    Args:
        collection: Normalized diagnostics to display.
        verbose: Include raw toolchain text and informational diagnostics.
        use_color: Whether colour output is requested.
        use_emoji: Whether status lines carry emoji prefixes.
    """

    diagnostics: list[Diagnostic] = [*collection.errors, *collection.warnings]
    if verbose:
        diagnostics.extend(collection.infos)

    if diagnostics:
        section("Diagnostics", use_color=use_color)
        console = get_console_manager().get(color=use_color, emoji=use_emoji)
        console.print(build_table(diagnostics, verbose=verbose))
    if collection.success:
        ok(collection.summary_message, use_emoji=use_emoji, use_color=use_color)
    else:
        fail(collection.summary_message, use_emoji=use_emoji, use_color=use_color)


def build_table(diagnostics: Sequence[Diagnostic], *, verbose: bool = False) -> Table:
    """Return a Rich table with one row per diagnostic."""

    table = Table(show_lines=False, box=None)
    table.add_column("Severity", style="bold", no_wrap=True)
    table.add_column("Location", no_wrap=True)
    table.add_column("Code", style="dim", no_wrap=True)
    table.add_column("Message", overflow="fold")
    table.add_column("Suggestions", overflow="fold", style="dim")
    if verbose:
        table.add_column("Raw", overflow="fold", style="dim")

    for diag in diagnostics:
        row = [
            Text(diag.severity.value, style=_SEVERITY_STYLES[diag.severity]),
            Text(format_location(diag)),
            Text(diag.code),
            Text(diag.message),
            Text("\n".join(diag.suggestions)),
        ]
        if verbose:
            row.append(Text(diag.raw_text))
        table.add_row(*row)
    return table


def format_location(diag: Diagnostic) -> str:
    """Return ``file:line:column`` for located diagnostics, else just the file."""

    if not diag.has_location:
        return diag.file
    return f"{diag.file}:{diag.line}:{diag.column}"


__all__ = ["build_table", "format_location", "render_collection"]
