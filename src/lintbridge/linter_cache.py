# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-directory cache of resolved ESLint instances.

Resolving a binary costs a subprocess, so the cache throttles repeated
lookups for the same directory. Missing entries are resolved synchronously;
present entries are refreshed in the background so newly added local
installs and uninstalled binaries are eventually noticed without delaying
the lint cycle. The cache never polls for deleted binaries itself: callers
that observe a failed invocation must :meth:`LinterCache.evict` the entry.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .binaries import BinaryLocator
from .constants import DEFAULT_THROTTLE_SECONDS
from .errors import ShellError
from .eslint import ESLint
from .filesystem import normalize
from .interfaces import ProcessRunner

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(slots=True)
class CacheEntry:
    """Cached resolution state for one directory.

    Attributes:
        instance: Resolved tool instance, ``None`` when nothing was found yet.
        last_updated: Clock reading at the last completed resolution.
    """

    instance: ESLint | None = None
    last_updated: float | None = None
    _pending: int = 0

    @property
    def updating(self) -> bool:
        """Return whether a resolution is currently in flight."""
        return self._pending > 0

    def begin_update(self) -> None:
        """Mark a resolution as started."""
        self._pending += 1

    def end_update(self) -> None:
        """Mark a resolution as finished."""
        if self._pending > 0:
            self._pending -= 1


def _differs(current: ESLint | None, fresh: ESLint | None) -> bool:
    if current is None or fresh is None:
        return current is not fresh
    return current.binary != fresh.binary or current.valid != fresh.valid


class LinterCache:
    """Keyed store of :class:`ESLint` instances with throttled re-resolution."""

    def __init__(
        self,
        locator: BinaryLocator,
        runner: ProcessRunner,
        *,
        throttle: float = DEFAULT_THROTTLE_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self._locator = locator
        self._runner = runner
        self._throttle = throttle
        self._clock = clock
        self._entries: dict[Path, CacheEntry] = {}
        self._refreshes: set[asyncio.Task[None]] = set()

    def entry(self, directory: Path) -> CacheEntry | None:
        """Return the cache entry for ``directory`` without resolving anything."""
        return self._entries.get(normalize(directory))

    def throttled(self, entry: CacheEntry) -> bool:
        """Return whether ``entry`` was resolved within the throttle window."""
        if entry.last_updated is None:
            return False
        return self._clock() - entry.last_updated < self._throttle

    async def get(self, directory: Path, *, refresh: bool = True) -> ESLint | None:
        """Return the tool instance for ``directory``.

        Args:
            directory: Directory whose ESLint install should be used.
            refresh: Start a background re-resolution for cached instances when not throttled.

        Returns:
            ESLint | None: Cached or freshly resolved instance, ``None`` when not installed.

        Raises:
            ShellError: If the binary lookup itself cannot run.
        """

        key = normalize(directory)
        entry = self._entries.setdefault(key, CacheEntry())
        if entry.instance is None:
            if not self.throttled(entry):
                await self._resolve(key, entry)
            return entry.instance
        if refresh and not entry.updating and not self.throttled(entry):
            self._spawn_refresh(key, entry)
        return entry.instance

    def evict(self, directory: Path) -> None:
        """Reset the entry for ``directory`` so the next lookup resolves immediately."""
        key = normalize(directory)
        if key in self._entries:
            LOGGER.debug("evicting cached linter for %s", key)
            self._entries[key] = CacheEntry()

    def clear(self) -> None:
        """Drop every entry and cancel pending background refreshes."""
        for task in list(self._refreshes):
            task.cancel()
        self._entries.clear()

    async def wait_for_refreshes(self) -> None:
        """Wait until all background refreshes have settled."""
        while self._refreshes:
            await asyncio.gather(*self._refreshes, return_exceptions=True)

    async def _resolve(self, key: Path, entry: CacheEntry) -> None:
        entry.begin_update()
        try:
            binary = await self._locator.locate(key)
        except ShellError:
            entry.last_updated = self._clock()
            raise
        finally:
            entry.end_update()
        entry.instance = ESLint(binary, self._runner) if binary is not None else None
        entry.last_updated = self._clock()

    def _spawn_refresh(self, key: Path, entry: CacheEntry) -> None:
        entry.begin_update()
        task = asyncio.get_running_loop().create_task(self._refresh(key, entry), name=f"lintbridge-refresh:{key}")
        self._refreshes.add(task)
        task.add_done_callback(self._on_refresh_done)

    async def _refresh(self, key: Path, entry: CacheEntry) -> None:
        try:
            binary = await self._locator.locate(key)
            fresh = ESLint(binary, self._runner) if binary is not None else None
            if _differs(entry.instance, fresh):
                LOGGER.debug("linter for %s changed: %r -> %r", key, entry.instance, fresh)
                entry.instance = fresh
        finally:
            entry.last_updated = self._clock()
            entry.end_update()

    def _on_refresh_done(self, task: asyncio.Task[None]) -> None:
        self._refreshes.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.warning("background linter refresh failed (%s): %s", task.get_name(), exc)


__all__ = ["CacheEntry", "Clock", "LinterCache"]
