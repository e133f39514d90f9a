# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User commands opening the ESLint files relevant to a document."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .interfaces import FileOpener, Notifier
from .logging import warn
from .resolver import find_all_configs, find_config, find_ignore

COMMAND_PREFIX: Final[str] = "lintbridge.cmd"
OPEN_CONFIG_ID: Final[str] = f"{COMMAND_PREFIX}.open-config"
OPEN_IGNORE_ID: Final[str] = f"{COMMAND_PREFIX}.open-ignore"

NO_PATH_MESSAGE: Final[str] = "The document has no path and no workspace is open."
NO_CONFIG_MESSAGE: Final[str] = "No ESLint configuration file was found."
NO_IGNORE_MESSAGE: Final[str] = "No ESLint ignore file was found."


class ConsoleNotifier:
    """Notifier printing to the terminal through the Rich helpers."""

    def __init__(self, *, use_emoji: bool = False) -> None:
        self.use_emoji = use_emoji

    def notify(self, identifier: str, message: str) -> None:
        warn(f"{message} ({identifier})", use_emoji=self.use_emoji)


def _target_path(document_path: Path | None, workspace_path: Path | None) -> Path | None:
    return document_path or workspace_path


def open_config(
    document_path: Path | None,
    *,
    opener: FileOpener,
    notifier: Notifier,
    workspace_path: Path | None = None,
    home: Path | None = None,
    cascade: bool = True,
) -> list[Path]:
    """Open the ESLint configuration governing a document.

    Args:
        document_path: Path of the active document, if saved.
        opener: Editor facility opening files.
        notifier: Facility reporting why nothing was opened.
        workspace_path: Fallback when the document has no path.
        home: Resolution boundary; defaults to the user's home directory.
        cascade: Open every configuration file up the hierarchy instead of only the nearest.

    Returns:
        list[Path]: Files that were opened, nearest first.
    """

    target = _target_path(document_path, workspace_path)
    if target is None:
        notifier.notify(OPEN_CONFIG_ID, NO_PATH_MESSAGE)
        return []
    if cascade:
        configs = find_all_configs(target, home=home)
    else:
        nearest = find_config(target, home=home)
        configs = [nearest] if nearest is not None else []
    if not configs:
        notifier.notify(OPEN_CONFIG_ID, NO_CONFIG_MESSAGE)
        return []
    for config in configs:
        opener.open_file(config)
    return configs


def open_ignore(
    document_path: Path | None,
    *,
    opener: FileOpener,
    notifier: Notifier,
    workspace_path: Path | None = None,
    home: Path | None = None,
) -> Path | None:
    """Open the ESLint ignore file governing a document.

    Returns:
        Path | None: The opened file, or ``None`` after notifying the user.
    """

    target = _target_path(document_path, workspace_path)
    if target is None:
        notifier.notify(OPEN_IGNORE_ID, NO_PATH_MESSAGE)
        return None
    ignore = find_ignore(target, home=home)
    if ignore is None:
        notifier.notify(OPEN_IGNORE_ID, NO_IGNORE_MESSAGE)
        return None
    opener.open_file(ignore)
    return ignore


__all__ = [
    "ConsoleNotifier",
    "NO_CONFIG_MESSAGE",
    "NO_IGNORE_MESSAGE",
    "NO_PATH_MESSAGE",
    "OPEN_CONFIG_ID",
    "OPEN_IGNORE_ID",
    "open_config",
    "open_ignore",
]
