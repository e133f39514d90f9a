# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintbridge package."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

DEFAULT_SOURCE = "lintbridge"


class Diagnostic(BaseModel):
    """Normalised lint diagnostic published for a document."""

    model_config = ConfigDict(frozen=True)

    source: str = DEFAULT_SOURCE
    message: str
    code: str | None = None
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    severity: Severity

    def matches(self, other: Diagnostic) -> bool:
        """Return whether ``other`` describes the same issue, ignoring ``source``.

        Args:
            other: Diagnostic to compare against.

        Returns:
            bool: ``True`` when every field except ``source`` is equal.
        """

        return self.model_dump(exclude={"source"}) == other.model_dump(exclude={"source"})


class ProcessResult(BaseModel):
    """Outcome of a finished subprocess."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def first_line(self) -> str:
        """Return the first non-blank stdout line, or an empty string."""
        for line in self.stdout.splitlines():
            if line.strip():
                return line.strip()
        return ""


class DocumentSnapshot(BaseModel):
    """Concrete document record used outside of a live editor (CLI, tests)."""

    model_config = ConfigDict(frozen=True)

    uri: str
    path: Path | None = None
    text: str = ""
    syntax: str = ""
    is_untitled: bool = False
    is_remote: bool = False

    @classmethod
    def from_file(cls, path: Path, *, syntax: str | None = None) -> DocumentSnapshot:
        """Build a snapshot from a file on disk.

        Args:
            path: File to read.
            syntax: Optional syntax tag; derived from the suffix when omitted.

        Returns:
            DocumentSnapshot: Snapshot carrying the file's current text.
        """

        resolved = path.expanduser().resolve()
        return cls(
            uri=resolved.as_uri(),
            path=resolved,
            text=resolved.read_text(encoding="utf-8"),
            syntax=syntax if syntax is not None else syntax_for_suffix(resolved.suffix),
        )


_SUFFIX_SYNTAX: dict[str, str] = {
    ".js": "javascript",
    ".cjs": "javascript",
    ".mjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".vue": "vue",
    ".json": "json",
    ".html": "html",
}


def syntax_for_suffix(suffix: str) -> str:
    """Return a syntax tag for a file suffix, defaulting to ``plaintext``."""
    return _SUFFIX_SYNTAX.get(suffix.lower(), "plaintext")


class DiagnosticSet(BaseModel):
    """Diagnostics keyed to a document, as rendered by the CLI."""

    key: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        """Return the number of error-level diagnostics."""
        return sum(1 for diag in self.diagnostics if diag.severity is Severity.ERROR)


__all__ = [
    "DEFAULT_SOURCE",
    "Diagnostic",
    "DiagnosticSet",
    "DocumentSnapshot",
    "ProcessResult",
    "syntax_for_suffix",
]
