# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Live ESLint diagnostics for editor integrations."""

from __future__ import annotations

from .config import Settings, load_settings
from .errors import ConfigError, LintBridgeError, ProcessError, ReportParseError, ShellError
from .issues import DiagnosticsReconciler, InMemoryDiagnosticsCollection
from .models import Diagnostic, DocumentSnapshot
from .orchestrator import LintOrchestrator
from .resolver import find_all_configs, find_config, find_ignore
from .severity import Severity

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticsReconciler",
    "DocumentSnapshot",
    "InMemoryDiagnosticsCollection",
    "LintBridgeError",
    "LintOrchestrator",
    "ProcessError",
    "ReportParseError",
    "Settings",
    "Severity",
    "ShellError",
    "find_all_configs",
    "find_config",
    "find_ignore",
    "load_settings",
]
