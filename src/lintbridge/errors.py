# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy for lint resolution and invocation failures."""

from __future__ import annotations

from pathlib import Path


class LintBridgeError(RuntimeError):
    """Base class for every failure raised inside a lint cycle."""


class ConfigError(LintBridgeError):
    """Raised when lintbridge settings are invalid."""


class ShellError(LintBridgeError):
    """Raised when a subprocess could not be executed at all."""

    def __init__(self, executable: Path | str, returncode: int | None, stderr: str = "") -> None:
        detail = stderr.strip() or "<no stderr>"
        status = "could not be spawned" if returncode is None else f"exited with status {returncode}"
        super().__init__(f"'{executable}' {status}: {detail}")
        self.executable = Path(executable)
        self.returncode = returncode
        self.stderr = stderr


class ProcessError(LintBridgeError):
    """Raised when the lint tool ran but exited with a failure-grade status."""

    def __init__(self, executable: Path, returncode: int, stderr: str = "") -> None:
        super().__init__(f"'{executable}' exited with status {returncode}: {stderr.strip() or '<no stderr>'}")
        self.executable = executable
        self.returncode = returncode
        self.stderr = stderr


class ReportParseError(LintBridgeError):
    """Raised when the lint tool's JSON report cannot be interpreted."""


__all__ = [
    "ConfigError",
    "LintBridgeError",
    "ProcessError",
    "ReportParseError",
    "ShellError",
]
