# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Constants shared by the lintbridge resolution and invocation layers."""

from __future__ import annotations

from typing import Final

MANIFEST_FILENAME: Final[str] = "package.json"
CONFIG_SECTION_KEY: Final[str] = "eslintConfig"
IGNORE_SECTION_KEY: Final[str] = "eslintIgnore"

# Ordered by ESLint's configuration file format precedence.
CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc.json",
    ".eslintrc",
)
IGNORE_FILENAMES: Final[tuple[str, ...]] = (".eslintignore",)

DEFAULT_PACKAGE: Final[str] = "eslint"
DEFAULT_RUNTIME: Final[str] = "node"
DEFAULT_LOOKUP: Final[str] = "npm-which"

# ESLint: 0 = clean, 1 = issues found, anything above is an execution failure.
LINT_ISSUES_EXIT_CEILING: Final[int] = 1
# Lookup tool: 0 = found (with output), 1 = not found, anything above is a shell failure.
LOOKUP_NOT_FOUND_EXIT: Final[int] = 1
LOOKUP_USAGE_PREFIX: Final[str] = "usage"

DEFAULT_THROTTLE_SECONDS: Final[float] = 60.0

ESLINT_ERROR_LEVEL: Final[int] = 2
FILE_IGNORED_PATTERN: Final[str] = r"^File ignored\b"
JAVASCRIPT_SYNTAX_PATTERN: Final[str] = r"\bjavascript\b"

TMP_DIRNAME: Final[str] = "tmp"

__all__ = [
    "CONFIG_FILENAMES",
    "CONFIG_SECTION_KEY",
    "DEFAULT_LOOKUP",
    "DEFAULT_PACKAGE",
    "DEFAULT_RUNTIME",
    "DEFAULT_THROTTLE_SECONDS",
    "ESLINT_ERROR_LEVEL",
    "FILE_IGNORED_PATTERN",
    "IGNORE_FILENAMES",
    "IGNORE_SECTION_KEY",
    "JAVASCRIPT_SYNTAX_PATTERN",
    "LINT_ISSUES_EXIT_CEILING",
    "LOOKUP_NOT_FOUND_EXIT",
    "LOOKUP_USAGE_PREFIX",
    "MANIFEST_FILENAME",
    "TMP_DIRNAME",
]
