# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Lint cycle orchestration for live editor diagnostics.

One :class:`LintOrchestrator` lives for an editing session and owns the
linter cache, the per-document result sequencer and the diagnostics
reconciler. A lint cycle never raises: it always ends with diagnostics
applied, cleared, or discarded as superseded, and failures are logged with
the document path and the configuration directory involved.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .binaries import BinaryLocator, RuntimeProbe, make_executable
from .config import Settings
from .errors import LintBridgeError, ProcessError, ReportParseError, ShellError
from .eslint import ESLint
from .filesystem import normalize
from .interfaces import DiagnosticsCollection, Notifier, ProcessRunner, TextDocument, Workspace
from .issues import DiagnosticsReconciler, InMemoryDiagnosticsCollection, IssueFilter
from .linter_cache import Clock, LinterCache
from .models import Diagnostic
from .process import AsyncProcessRunner
from .resolver import find_config
from .sequencer import ResultSequencer

LOGGER = logging.getLogger(__name__)

ACTIVATION_ERROR_ID = "lintbridge.msg.activation-error"


class LintOutcome(str, Enum):
    """How a lint cycle ended."""

    APPLIED = "applied"
    CLEARED = "cleared"
    DISCARDED = "discarded"


class RetryReason(str, Enum):
    """Failure classes that may warrant re-running a lint cycle."""

    PROCESS_ERROR = "process_error"
    SHELL_ERROR = "shell_error"

    @classmethod
    def for_error(cls, error: LintBridgeError) -> RetryReason | None:
        """Return the retry reason matching ``error``, if any."""
        if isinstance(error, ProcessError):
            return cls.PROCESS_ERROR
        if isinstance(error, ShellError):
            return cls.SHELL_ERROR
        return None


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded retry policy for failed lint invocations."""

    max_retries: int = 1
    reasons: frozenset[RetryReason] = field(default_factory=lambda: frozenset(RetryReason))

    def allows(self, attempt: int, reason: RetryReason | None) -> bool:
        """Return whether a failed ``attempt`` (zero-based) may be retried for ``reason``."""
        return reason is not None and reason in self.reasons and attempt < self.max_retries


class LintOrchestrator:
    """Drive lint cycles for open documents and publish their diagnostics."""

    def __init__(
        self,
        settings: Settings,
        workspace: Workspace,
        *,
        collection: DiagnosticsCollection | None = None,
        runner: ProcessRunner | None = None,
        notifier: Notifier | None = None,
        home: Path | None = None,
        clock: Clock | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.settings = settings
        self.workspace = workspace
        self.collection = collection if collection is not None else InMemoryDiagnosticsCollection()
        self.runner = runner if runner is not None else AsyncProcessRunner()
        self.notifier = notifier
        self.home = home
        self.retry_policy = retry_policy or RetryPolicy()
        self.locator = BinaryLocator(self.runner, lookup=settings.lookup, package=settings.package)
        self.cache = LinterCache(
            self.locator,
            self.runner,
            throttle=settings.throttle_seconds,
            clock=clock or time.monotonic,
        )
        self.runtime = RuntimeProbe(settings.runtime)
        self.sequencer = ResultSequencer()
        self.reconciler = DiagnosticsReconciler(self.collection)
        self.issue_filter = IssueFilter(settings.javascript_syntax_pattern)
        self._disabled = settings.disabled
        self._activation_error_shown = False

    @property
    def disabled(self) -> bool:
        """Return whether linting is switched off for the workspace."""
        return self._disabled

    def activate(self) -> bool:
        """Ensure bundled helper binaries are executable.

        A failure is reported to the user once per session and never raised.

        Returns:
            bool: ``True`` when activation succeeded.
        """

        try:
            changed = make_executable(self.settings.bundled_binaries)
        except OSError as exc:
            LOGGER.error("activation failed: %s", exc)
            if self.notifier is not None and not self._activation_error_shown:
                self.notifier.notify(ACTIVATION_ERROR_ID, f"lintbridge could not be activated: {exc}")
                self._activation_error_shown = True
            return False
        if changed:
            LOGGER.debug("marked %d bundled binaries executable", changed)
        return True

    def deactivate(self) -> None:
        """Drop every published diagnostic and cached linter."""
        self.reconciler.clear()
        self.cache.clear()

    async def maybe_lint(self, document: TextDocument) -> LintOutcome:
        """Run one lint cycle for ``document``.

        Args:
            document: Editor document to lint; its text is captured immediately.

        Returns:
            LintOutcome: How the cycle ended for the document.
        """

        uri = document.uri
        if self._disabled:
            self.reconciler.clear()
            return LintOutcome.CLEARED
        # No directory hierarchy to walk; empty documents are still linted.
        if document.is_untitled or document.is_remote or document.path is None:
            self.reconciler.remove(uri)
            return LintOutcome.CLEARED

        text = document.text
        syntax = document.syntax
        path = normalize(document.path)

        ticket = self.sequencer.start(uri)
        diagnostics = await self._lint_with_retry(text, path)
        return self._settle(uri, ticket, diagnostics, syntax)

    async def lint_all(self) -> list[LintOutcome]:
        """Lint every open document concurrently."""
        return list(await asyncio.gather(*(self.maybe_lint(doc) for doc in self.workspace.documents())))

    def on_document_closed(self, document: TextDocument) -> None:
        """Purge diagnostics for a closed document."""
        self.reconciler.reconcile(document.uri, None, closed=True)

    async def on_document_renamed(
        self,
        old_uri: str,
        document: TextDocument,
        *,
        old_gone: bool = False,
    ) -> LintOutcome:
        """Carry diagnostics over to a renamed document and re-lint it.

        Args:
            old_uri: Identifier before the rename (e.g. before "save as").
            document: The document under its new identity.
            old_gone: Whether the old document handle is confirmed gone.

        Returns:
            LintOutcome: Outcome of the follow-up lint cycle.
        """

        self.reconciler.transplant(old_uri, document.uri, old_gone=old_gone)
        return await self.maybe_lint(document)

    async def on_config_changed(self, *, disabled: bool) -> list[LintOutcome]:
        """Apply a changed "disable" toggle and re-lint open documents.

        Args:
            disabled: New value of the workspace toggle.

        Returns:
            list[LintOutcome]: Outcomes of the triggered cycles; empty when nothing changed.
        """

        if disabled == self._disabled:
            return []
        self._disabled = disabled
        if disabled:
            self.reconciler.clear()
        return await self.lint_all()

    async def _lint_with_retry(self, text: str, path: Path) -> list[Diagnostic] | None:
        attempt = 0
        while True:
            if not self.runtime.available():
                LOGGER.debug("runtime %r not found on PATH; skipping %s", self.runtime.runtime, path)
                return None
            config = find_config(path, home=self.home)
            if config is None:
                LOGGER.debug("no ESLint configuration governs %s", path)
                return None
            directory = config.parent
            linter = await self._linter_for(directory)
            if linter is None:
                return None
            try:
                return await linter.lint(text, path, storage_path=self.settings.storage_path)
            except ReportParseError as exc:
                LOGGER.error("cannot read ESLint report for %s (config in %s): %s", path, directory, exc)
                return None
            except (ProcessError, ShellError) as exc:
                reason = RetryReason.for_error(exc)
                if not self.retry_policy.allows(attempt, reason):
                    LOGGER.error("linting %s failed (config in %s): %s", path, directory, exc)
                    return None
                LOGGER.info("retrying lint of %s after %s: %s", path, reason.value if reason else "error", exc)
                self.cache.evict(directory)
                self.runtime.invalidate()
                attempt += 1

    async def _linter_for(self, directory: Path) -> ESLint | None:
        # Lookup failures already got their self-heal retry; the throttle stamp stays.
        try:
            linter = await self.cache.get(directory)
            if linter is not None and not linter.valid:
                LOGGER.info("cached ESLint %s is no longer executable", linter.binary)
                self.cache.evict(directory)
                linter = await self.cache.get(directory)
        except ShellError as exc:
            LOGGER.error("cannot locate ESLint for %s: %s", directory, exc)
            return None
        if linter is None:
            LOGGER.debug("no ESLint binary found for %s", directory)
        return linter

    def _settle(
        self,
        uri: str,
        ticket: int,
        diagnostics: Sequence[Diagnostic] | None,
        syntax: str,
    ) -> LintOutcome:
        if self.workspace.is_closed(uri):
            self.reconciler.reconcile(uri, None, closed=True)
            return LintOutcome.CLEARED
        if not self.sequencer.complete(uri, ticket):
            LOGGER.debug("discarding superseded lint run %d for %s", ticket, uri)
            return LintOutcome.DISCARDED
        issues = self.issue_filter(diagnostics, syntax) if diagnostics else []
        self.reconciler.reconcile(uri, issues)
        return LintOutcome.APPLIED if issues else LintOutcome.CLEARED


__all__ = [
    "ACTIVATION_ERROR_ID",
    "LintOrchestrator",
    "LintOutcome",
    "RetryPolicy",
    "RetryReason",
]
