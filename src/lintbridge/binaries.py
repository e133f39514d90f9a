# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the ESLint executable and manage helper binaries."""

from __future__ import annotations

import logging
import shutil
import stat
from collections.abc import Iterable
from pathlib import Path

from .constants import DEFAULT_LOOKUP, DEFAULT_PACKAGE, DEFAULT_RUNTIME, LOOKUP_NOT_FOUND_EXIT, LOOKUP_USAGE_PREFIX
from .errors import ShellError
from .filesystem import is_executable, normalize
from .interfaces import ProcessRunner

LOGGER = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def make_executable(paths: Iterable[Path]) -> int:
    """Ensure every binary in ``paths`` carries the executable bit.

    Args:
        paths: Binaries shipped alongside the integration.

    Returns:
        int: Number of binaries whose mode had to be changed.

    Raises:
        FileNotFoundError: If any binary is missing.
        OSError: If changing a file mode fails.
    """

    binaries = [Path(path) for path in paths]
    missing = [binary for binary in binaries if not binary.exists()]
    if missing:
        raise FileNotFoundError(f"Can't locate extension binaries at path '{missing[0]}'.")
    changed = 0
    for binary in binaries:
        if is_executable(binary):
            continue
        binary.chmod(binary.stat().st_mode | _EXEC_BITS)
        changed += 1
    return changed


def find_in_path(*names: str) -> bool:
    """Return whether every executable in ``names`` is found on ``PATH``."""

    return all(shutil.which(name) is not None for name in names)


class RuntimeProbe:
    """Remember whether the tool's interpreter runtime is installed.

    Only a positive answer is cached, so installing the runtime mid-session is
    picked up on the next lint cycle.
    """

    def __init__(self, runtime: str = DEFAULT_RUNTIME) -> None:
        self.runtime = runtime
        self._installed = False

    def available(self) -> bool:
        """Return whether the runtime is on ``PATH``."""
        if not self._installed:
            self._installed = find_in_path(self.runtime)
        return self._installed

    def invalidate(self) -> None:
        """Forget a previous positive answer."""
        self._installed = False


class BinaryLocator:
    """Resolve the ESLint binary for a directory via a package lookup tool.

    The lookup tool (``npm-which`` compatible) prefers a project-local
    ``node_modules`` install over a global one and prints the resolved path on
    its first stdout line.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        *,
        lookup: Path | str | None = None,
        package: str = DEFAULT_PACKAGE,
    ) -> None:
        self._runner = runner
        self.lookup = Path(lookup) if lookup is not None else Path(shutil.which(DEFAULT_LOOKUP) or DEFAULT_LOOKUP)
        self.package = package

    async def locate(self, directory: Path) -> Path | None:
        """Return the binary path resolved from ``directory``.

        A failure to run the lookup tool triggers a single self-heal attempt
        (restoring its executable bit) followed by one retry.

        Args:
            directory: Directory the lookup runs from.

        Returns:
            Path | None: Resolved binary, or ``None`` when the package is not installed.

        Raises:
            ShellError: If the lookup tool cannot run even after the self-heal.
        """

        try:
            return await self._lookup(directory)
        except ShellError as exc:
            LOGGER.warning("binary lookup failed in %s: %s", directory, exc)
            if not self._heal():
                raise
        return await self._lookup(directory)

    async def _lookup(self, directory: Path) -> Path | None:
        result = await self._runner.run(self.lookup, [self.package], cwd=directory, use_shell=True)
        if result.stderr.strip():
            LOGGER.debug("lookup stderr in %s: %s", directory, result.stderr.strip())
        if result.returncode == 0:
            line = result.first_line
            if not line or line.lower().startswith(LOOKUP_USAGE_PREFIX):
                return None
            found = Path(line).expanduser()
            return normalize(found if found.is_absolute() else directory / found)
        if result.returncode == LOOKUP_NOT_FOUND_EXIT:
            return None
        raise ShellError(self.lookup, result.returncode, result.stderr)

    def _heal(self) -> bool:
        if not self.lookup.exists():
            return False
        try:
            make_executable([self.lookup])
        except OSError as exc:
            LOGGER.warning("cannot mark %s executable: %s", self.lookup, exc)
            return False
        return True


__all__ = ["BinaryLocator", "RuntimeProbe", "find_in_path", "make_executable"]
