# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ordering gate keeping only the most recently started lint run per document."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SequenceCounter:
    """Start/end bookkeeping for one document URI."""

    last_started: int = 1
    last_ended: int = 0


class ResultSequencer:
    """Hand out admission tickets and reject completions that arrive out of order.

    Runs are never cancelled; a run that finishes after a later-started run
    has already been applied is silently discarded. Counters live as long as
    the sequencer: resetting one while runs are in flight would readmit them.
    """

    def __init__(self) -> None:
        self._counters: dict[str, SequenceCounter] = {}

    def start(self, uri: str) -> int:
        """Return the admission ticket for a lint run on ``uri``."""
        counter = self._counters.setdefault(uri, SequenceCounter())
        ticket = counter.last_started
        counter.last_started += 1
        return ticket

    def complete(self, uri: str, ticket: int) -> bool:
        """Record the completion of ``ticket`` and return whether its result applies.

        Args:
            uri: Document identifier the run belongs to.
            ticket: Ticket returned by :meth:`start`.

        Returns:
            bool: ``True`` when no later-started run has completed yet.
        """

        counter = self._counters.setdefault(uri, SequenceCounter())
        if counter.last_ended >= ticket:
            return False
        counter.last_ended = ticket
        return True

    def counter(self, uri: str) -> SequenceCounter | None:
        """Return the counter for ``uri`` if a run was ever started."""
        return self._counters.get(uri)


__all__ = ["ResultSequencer", "SequenceCounter"]
