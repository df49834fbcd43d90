# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for presenting toolchain-reported source paths."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePosixPath


def display_path(raw: str | None, *, source_roots: Sequence[str], unknown: str) -> str:
    """Return ``raw`` as a display path relative to the first matching source root.

    The transformation is purely lexical; the filesystem is never consulted,
    since the reported paths belong to the remote compiler workspace.

    Args:
        raw: Path reported by the toolchain, possibly ``None`` or blank.
        source_roots: Prefixes (with trailing ``/``) stripped for display.
        unknown: Sentinel returned when no usable path is available.

    Returns:
        str: Forward-slash path with the source root removed, or ``unknown``.
    """

    if raw is None:
        return unknown
    text = raw.strip().replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    if not text:
        return unknown
    for root in source_roots:
        if text.startswith(root) and len(text) > len(root):
            text = text[len(root) :]
            break
    posix = PurePosixPath(text).as_posix()
    return posix if posix not in {"", "."} else unknown


__all__ = ["display_path"]
