# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint tool instance and JSON report parsing."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .constants import LINT_ISSUES_EXIT_CEILING
from .errors import ProcessError, ReportParseError
from .filesystem import is_executable, normalize, tmp_dir
from .interfaces import ProcessRunner
from .models import DEFAULT_SOURCE, Diagnostic
from .severity import severity_from_eslint

LOGGER = logging.getLogger(__name__)


class LintMessage(BaseModel):
    """Single message inside an ESLint JSON report entry."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message: str = ""
    rule_id: str | None = Field(default=None, alias="ruleId")
    line: int | None = None
    column: int | None = None
    end_line: int | None = Field(default=None, alias="endLine")
    end_column: int | None = Field(default=None, alias="endColumn")
    severity: int | None = None
    fatal: bool = False

    def to_diagnostic(self, *, source: str = DEFAULT_SOURCE) -> Diagnostic:
        """Normalise the message, defaulting missing positions.

        Args:
            source: Label recorded as the diagnostic's origin.

        Returns:
            Diagnostic: Missing start positions become ``0``; missing end
            positions fall back to the start position.
        """

        line = self.line or 0
        column = self.column or 0
        return Diagnostic(
            source=source,
            message=self.message,
            code=self.rule_id,
            line=line,
            column=column,
            end_line=self.end_line or line,
            end_column=self.end_column or column,
            severity=severity_from_eslint(self.severity, fatal=self.fatal),
        )


class LintReportEntry(BaseModel):
    """Per-file entry of an ESLint JSON report."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file_path: str | None = Field(default=None, alias="filePath")
    messages: list[LintMessage] = Field(default_factory=list)


_REPORT_ADAPTER: TypeAdapter[list[LintReportEntry]] = TypeAdapter(list[LintReportEntry])


def parse_report(stdout: str, *, source: str = DEFAULT_SOURCE) -> list[Diagnostic]:
    """Parse ESLint ``--format json`` output for a single linted document.

    Args:
        stdout: Raw report text.
        source: Label recorded on every diagnostic.

    Returns:
        list[Diagnostic]: Diagnostics from the first report entry; empty for blank output.

    Raises:
        ReportParseError: If the output is not a valid ESLint JSON report.
    """

    if not stdout.strip():
        return []
    try:
        entries = _REPORT_ADAPTER.validate_json(stdout)
    except ValidationError as exc:
        raise ReportParseError(f"malformed ESLint report: {exc.errors()[0]['msg']}") from exc
    if not entries:
        return []
    return [message.to_diagnostic(source=source) for message in entries[0].messages]


class ESLint:
    """An ESLint CLI binary bound to the subprocess facility.

    Instances are immutable; re-resolution produces a new instance.
    """

    __slots__ = ("_binary", "_runner")

    def __init__(self, binary: Path | str, runner: ProcessRunner) -> None:
        self._binary = normalize(binary)
        self._runner = runner

    @property
    def binary(self) -> Path:
        """Return the normalised path to the ESLint binary."""
        return self._binary

    @property
    def valid(self) -> bool:
        """Return whether the binary still exists and is executable."""
        return is_executable(self._binary)

    def __repr__(self) -> str:
        return f"ESLint({str(self._binary)!r})"

    async def lint(
        self,
        source: str,
        path: Path,
        *,
        storage_path: Path | None = None,
        label: str = DEFAULT_SOURCE,
    ) -> list[Diagnostic]:
        """Lint in-memory ``source`` as if it were the file at ``path``.

        Args:
            source: Document text, fed through standard input.
            path: Real file path, used for path-based configuration and as working directory anchor.
            storage_path: Storage root offering a cache directory; caching is skipped when unavailable.
            label: Source label recorded on produced diagnostics.

        Returns:
            list[Diagnostic]: Diagnostics reported for the document.

        Raises:
            ProcessError: If ESLint exits above its "issues found" status.
            ReportParseError: If the report cannot be parsed.
            ShellError: If ESLint cannot be spawned.
        """

        args = ["--format", "json", "--stdin", "--stdin-filename", str(path)]
        if storage_path is not None:
            try:
                args += ["--cache", "--cache-location", str(tmp_dir(storage_path))]
            except OSError as exc:
                LOGGER.warning("ESLint cache disabled: %s", exc)

        # Plugins resolve relative settings from the working directory.
        result = await self._runner.run(self._binary, args, cwd=path.parent, stdin=source)
        if result.returncode > LINT_ISSUES_EXIT_CEILING or result.returncode < 0:
            raise ProcessError(self._binary, result.returncode, result.stderr)
        return parse_report(result.stdout, source=label)


__all__ = ["ESLint", "LintMessage", "LintReportEntry", "parse_report"]
