# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate ESLint configuration and ignore files for a document path.

Resolution walks upward from the document's directory, one level at a time,
and never leaves the user's home directory. Each directory is matched against
an ordered list of candidate names; the first candidate present wins. A
manifest candidate (``package.json``) only matches when it embeds the
configured section, otherwise the walk continues upward.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .constants import (
    CONFIG_FILENAMES,
    CONFIG_SECTION_KEY,
    IGNORE_FILENAMES,
    IGNORE_SECTION_KEY,
    MANIFEST_FILENAME,
)
from .filesystem import home_path, is_within, list_names, normalize, read_manifest

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CandidateName:
    """File name probed in each directory during resolution.

    Attributes:
        name: File name to look for (matched case-insensitively).
        is_manifest: Whether the file is a package manifest that may embed the configuration.
        section_key: Top-level manifest key that must be present for a manifest to match.
    """

    name: str
    is_manifest: bool = False
    section_key: str | None = None

    def accepts(self, path: Path) -> bool:
        """Return whether the on-disk file at ``path`` satisfies this candidate."""
        if not self.is_manifest:
            return True
        manifest = read_manifest(path)
        if manifest is None:
            return False
        return self.section_key is None or self.section_key in manifest


def _candidates(names: Sequence[str], section_key: str | None) -> tuple[CandidateName, ...]:
    entries = [CandidateName(name) for name in names]
    if section_key:
        entries.append(CandidateName(MANIFEST_FILENAME, is_manifest=True, section_key=section_key))
    return tuple(entries)


CONFIG_CANDIDATES: Final[tuple[CandidateName, ...]] = _candidates(CONFIG_FILENAMES, CONFIG_SECTION_KEY)
IGNORE_CANDIDATES: Final[tuple[CandidateName, ...]] = _candidates(IGNORE_FILENAMES, IGNORE_SECTION_KEY)


def _start_directory(path: Path) -> Path:
    return path.parent if path.is_file() else path


def _match_in(directory: Path, candidates: Sequence[CandidateName]) -> Path | None:
    on_disk = {name.lower(): name for name in list_names(directory)}
    if not on_disk:
        return None
    for candidate in candidates:
        actual = on_disk.get(candidate.name.lower())
        if actual is None:
            continue
        found = directory / actual
        if candidate.accepts(found):
            return found
        LOGGER.debug("skipping %s: section %r not present", found, candidate.section_key)
    return None


def resolve_nearest(
    path: Path | str,
    candidates: Sequence[CandidateName],
    *,
    home: Path | None = None,
) -> Path | None:
    """Return the nearest file matching ``candidates`` above ``path``.

    Args:
        path: File or directory to start from.
        candidates: Ordered candidate names; earlier entries take precedence within a directory.
        home: Boundary directory; defaults to the user's home directory.

    Returns:
        Path | None: Matching file, or ``None`` when nothing matches up to and including ``home``.
    """

    boundary = normalize(home) if home is not None else home_path()
    start = normalize(path)
    if not is_within(start, boundary):
        return None
    directory = _start_directory(start)
    while True:
        found = _match_in(directory, candidates)
        if found is not None:
            return found
        if directory == boundary or directory.parent == directory:
            return None
        directory = directory.parent


def resolve_all(
    path: Path | str,
    candidates: Sequence[CandidateName],
    *,
    home: Path | None = None,
) -> list[Path]:
    """Return every matching file in the hierarchy above ``path``, nearest first.

    Args:
        path: File or directory to start from.
        candidates: Ordered candidate names.
        home: Boundary directory; defaults to the user's home directory.

    Returns:
        list[Path]: The configuration cascade.
    """

    found: list[Path] = []
    start = normalize(path)
    while True:
        match = resolve_nearest(start, candidates, home=home)
        if match is None:
            break
        found.append(match)
        following = match.parent.parent
        if following == match.parent:
            break
        start = following
    return found


def find_config(path: Path | str, *, home: Path | None = None) -> Path | None:
    """Return the ESLint configuration file governing ``path``, if any."""

    return resolve_nearest(path, CONFIG_CANDIDATES, home=home)


def find_all_configs(path: Path | str, *, home: Path | None = None) -> list[Path]:
    """Return the full ESLint configuration cascade for ``path``, nearest first."""

    return resolve_all(path, CONFIG_CANDIDATES, home=home)


def find_ignore(path: Path | str, *, home: Path | None = None) -> Path | None:
    """Return the ESLint ignore file governing ``path``, if any."""

    return resolve_nearest(path, IGNORE_CANDIDATES, home=home)


__all__ = [
    "CONFIG_CANDIDATES",
    "IGNORE_CANDIDATES",
    "CandidateName",
    "find_all_configs",
    "find_config",
    "find_ignore",
    "resolve_all",
    "resolve_nearest",
]
