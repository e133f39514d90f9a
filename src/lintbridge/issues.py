# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filtering of ESLint results and reconciliation with published diagnostics."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

from .constants import FILE_IGNORED_PATTERN, JAVASCRIPT_SYNTAX_PATTERN
from .interfaces import DiagnosticsCollection
from .logging import RepeatFilter
from .models import Diagnostic
from .severity import Severity

LOGGER = logging.getLogger(__name__)

_FILE_IGNORED_RE = re.compile(FILE_IGNORED_PATTERN)


class IssueFilter:
    """Drop ESLint results that are not source code issues.

    ESLint reports several non-issues as a lone message: the "file ignored"
    warning for ignored paths, and a single rule-less fatal error both for
    misconfiguration and for file types it cannot parse.
    """

    def __init__(self, javascript_pattern: str = JAVASCRIPT_SYNTAX_PATTERN) -> None:
        self._javascript = re.compile(javascript_pattern, re.IGNORECASE)
        self._repeats = RepeatFilter()

    def __call__(self, issues: Sequence[Diagnostic], syntax: str) -> list[Diagnostic]:
        """Return the issues worth publishing for a document of ``syntax``.

        Args:
            issues: Diagnostics produced by the lint run.
            syntax: Editor syntax tag of the linted document.

        Returns:
            list[Diagnostic]: ``issues`` minus tool-level noise.
        """

        if len(issues) != 1:
            return list(issues)
        issue = issues[0]
        if issue.severity is Severity.WARNING and _FILE_IGNORED_RE.match(issue.message):
            return []
        if issue.severity is Severity.ERROR and issue.code is None:
            if not issue.line:
                # Execution errors carry no location; log without flooding.
                self._repeats.warn(LOGGER, issue.message)
                return []
            if self._javascript.search(syntax or ""):
                return [issue]
            return []
        return [issue]


def changed_issues(known: Sequence[Diagnostic], incoming: Sequence[Diagnostic]) -> bool:
    """Return whether ``incoming`` differs from ``known``.

    Order is irrelevant; ``source`` is ignored.

    Args:
        known: Currently published diagnostics.
        incoming: Diagnostics from the latest lint run.

    Returns:
        bool: ``True`` when counts differ or an incoming diagnostic has no match in ``known``.
    """

    if len(known) != len(incoming):
        return True
    return any(not any(candidate.matches(issue) for candidate in known) for issue in incoming)


class InMemoryDiagnosticsCollection:
    """Dictionary-backed :class:`~lintbridge.interfaces.DiagnosticsCollection`."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[Diagnostic, ...]] = {}

    def set(self, key: str, diagnostics: Sequence[Diagnostic]) -> None:
        self._store[key] = tuple(diagnostics)

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def has(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str) -> Sequence[Diagnostic]:
        return self._store.get(key, ())

    def clear(self) -> None:
        self._store.clear()

    def keys(self) -> list[str]:
        """Return the keys that currently have diagnostics."""
        return list(self._store)

    def __iter__(self) -> Iterator[tuple[str, tuple[Diagnostic, ...]]]:
        return iter(self._store.items())

    def __len__(self) -> int:
        return len(self._store)


class DiagnosticsReconciler:
    """Publish diagnostics only when they change."""

    def __init__(self, collection: DiagnosticsCollection) -> None:
        self.collection = collection

    def reconcile(self, key: str, incoming: Sequence[Diagnostic] | None, *, closed: bool = False) -> bool:
        """Bring the published diagnostics for ``key`` in line with ``incoming``.

        Args:
            key: Document identifier.
            incoming: Latest diagnostics; ``None`` or empty removes the entry.
            closed: Whether the document is known to be closed.

        Returns:
            bool: ``True`` when the collection was modified.
        """

        present = self.collection.has(key)
        if closed or not incoming:
            if present:
                self.collection.remove(key)
            return present
        if present and not changed_issues(self.collection.get(key), incoming):
            return False
        self.collection.set(key, list(incoming))
        return True

    def remove(self, key: str) -> bool:
        """Remove diagnostics for ``key``; a no-op when none are published."""
        return self.reconcile(key, None)

    def transplant(self, old_key: str, new_key: str, *, old_gone: bool = False) -> None:
        """Move diagnostics to a document's new identity.

        Args:
            old_key: Identifier before the rename.
            new_key: Identifier after the rename.
            old_gone: Whether the old document handle is confirmed gone; its diagnostics are then
                dropped instead of moved.
        """

        if old_key == new_key or not self.collection.has(old_key):
            return
        diagnostics = list(self.collection.get(old_key))
        self.collection.remove(old_key)
        if old_gone:
            return
        self.reconcile(new_key, diagnostics)

    def clear(self) -> None:
        """Remove every published diagnostic."""
        self.collection.clear()


__all__ = [
    "DiagnosticsReconciler",
    "InMemoryDiagnosticsCollection",
    "IssueFilter",
    "changed_issues",
]
