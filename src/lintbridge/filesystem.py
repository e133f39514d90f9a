# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import json
import logging
import os
from os import PathLike
from pathlib import Path
from typing import Any

from .constants import TMP_DIRNAME

LOGGER = logging.getLogger(__name__)

_Pathish = str | PathLike[str] | Path


def normalize(path: _Pathish) -> Path:
    """Return ``path`` user-expanded and made absolute without resolving symlinks.

    Args:
        path: Filesystem path supplied by the caller.

    Returns:
        Path: Absolute, lexically normalised path.

    Raises:
        ValueError: If ``path`` is ``None``.
    """

    if path is None:
        raise ValueError("path must not be None")
    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(os.fspath(path)))))


def home_path() -> Path:
    """Return the current user's normalised home directory."""

    return normalize(Path.home())


def is_within(path: _Pathish, root: _Pathish) -> bool:
    """Return whether ``path`` equals ``root`` or lives below it."""

    return normalize(path).is_relative_to(normalize(root))


def is_executable(path: _Pathish) -> bool:
    """Return whether ``path`` is an existing file with the executable bit set."""

    candidate = Path(path)
    return candidate.is_file() and os.access(candidate, os.X_OK)


def list_names(directory: Path) -> list[str]:
    """Return entry names in ``directory``, or an empty list when unreadable."""

    try:
        return sorted(entry.name for entry in directory.iterdir())
    except OSError as exc:
        LOGGER.debug("cannot list %s: %s", directory, exc)
        return []


def read_manifest(path: Path) -> dict[str, Any] | None:
    """Read a small JSON manifest such as ``package.json``.

    Args:
        path: Manifest file to read.

    Returns:
        dict[str, Any] | None: Parsed top-level object, or ``None`` when the file is
        empty, unreadable, malformed, or not a JSON object.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("cannot read manifest %s: %s", path, exc)
        return None
    if not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        LOGGER.warning("malformed manifest %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        LOGGER.warning("manifest %s is not a JSON object", path)
        return None
    return data


def tmp_dir(storage_path: Path) -> Path:
    """Return a writable temporary directory below ``storage_path``.

    The directory is created on first use.

    Args:
        storage_path: Workspace storage root owned by the integration.

    Returns:
        Path: Writable ``tmp`` directory.

    Raises:
        OSError: When the path exists but is not a writable directory, or cannot be created.
    """

    tmp = storage_path / TMP_DIRNAME
    if not tmp.exists():
        tmp.mkdir(parents=True)
        return tmp
    if not tmp.is_dir():
        raise NotADirectoryError(f"temporary path exists but is not a directory: {tmp}")
    if not os.access(tmp, os.W_OK):
        raise PermissionError(f"temporary directory is not writable: {tmp}")
    return tmp


__all__ = [
    "home_path",
    "is_executable",
    "is_within",
    "list_names",
    "normalize",
    "read_manifest",
    "tmp_dir",
]
