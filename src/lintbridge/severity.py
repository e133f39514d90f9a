# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum

from .constants import ESLINT_ERROR_LEVEL


class Severity(str, Enum):
    """Severity levels published to the editor's issue surface."""

    ERROR = "error"
    WARNING = "warning"


def severity_from_eslint(level: int | None, *, fatal: bool = False) -> Severity:
    """Map an ESLint message severity onto :class:`Severity`.

    Args:
        level: Numeric ESLint severity (``1`` warning, ``2`` error).
        fatal: Whether ESLint flagged the message as fatal (parse failure).

    Returns:
        Severity: ``ERROR`` for fatal or highest-level messages, otherwise ``WARNING``.
    """

    if fatal or level == ESLINT_ERROR_LEVEL:
        return Severity.ERROR
    return Severity.WARNING


__all__ = ["Severity", "severity_from_eslint"]
