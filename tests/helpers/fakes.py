# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Test doubles for the editor and subprocess collaborators."""

from __future__ import annotations

import asyncio
import json
import stat
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from lintbridge.errors import ShellError
from lintbridge.models import DocumentSnapshot, ProcessResult

Responder = Callable[["RunCall"], ProcessResult | BaseException]


@dataclass(slots=True)
class RunCall:
    """One recorded invocation of :class:`FakeRunner`."""

    executable: Path
    args: tuple[str, ...]
    cwd: Path | None
    stdin: str | None
    use_shell: bool


@dataclass
class FakeRunner:
    """Scripted :class:`~lintbridge.interfaces.ProcessRunner`.

    ``lookup`` answers calls made through the shell (binary lookups) and
    ``lint`` answers direct calls (ESLint runs). Each is either a single
    response reused forever, a list consumed in order, or a callable.
    """

    lookup: ProcessResult | BaseException | list[ProcessResult | BaseException] | Responder | None = None
    lint: ProcessResult | BaseException | list[ProcessResult | BaseException] | Responder | None = None
    delays: dict[str, float] = field(default_factory=dict)
    calls: list[RunCall] = field(default_factory=list)

    async def run(
        self,
        executable: Path | str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
        stdin: str | None = None,
        use_shell: bool = False,
    ) -> ProcessResult:
        call = RunCall(Path(executable), tuple(args), cwd, stdin, use_shell)
        self.calls.append(call)
        if stdin is not None and stdin in self.delays:
            await asyncio.sleep(self.delays[stdin])
        outcome = self._next(self.lookup if use_shell else self.lint, call)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def lookup_calls(self) -> list[RunCall]:
        return [call for call in self.calls if call.use_shell]

    @property
    def lint_calls(self) -> list[RunCall]:
        return [call for call in self.calls if not call.use_shell]

    def _next(self, script, call: RunCall) -> ProcessResult | BaseException:
        if script is None:
            return ShellError(call.executable, None, "no scripted response")
        if isinstance(script, list):
            return script.pop(0) if len(script) > 1 else script[0]
        if callable(script):
            return script(call)
        return script


@dataclass
class FakeWorkspace:
    """Workspace whose open documents are managed by the test."""

    open_documents: dict[str, DocumentSnapshot] = field(default_factory=dict)

    def open(self, document: DocumentSnapshot) -> DocumentSnapshot:
        self.open_documents[document.uri] = document
        return document

    def close(self, uri: str) -> None:
        self.open_documents.pop(uri, None)

    def documents(self) -> Iterable[DocumentSnapshot]:
        return list(self.open_documents.values())

    def is_closed(self, uri: str) -> bool:
        return uri not in self.open_documents


@dataclass
class RecordingNotifier:
    """Notifier remembering every notification it was asked to show."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, identifier: str, message: str) -> None:
        self.messages.append((identifier, message))


@dataclass
class RecordingOpener:
    """File opener remembering the files it opened."""

    opened: list[Path] = field(default_factory=list)

    def open_file(self, path: Path) -> None:
        self.opened.append(path)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_binary(path: Path, *, executable: bool = True) -> Path:
    """Create a placeholder binary at ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    mode = path.stat().st_mode
    if executable:
        path.chmod(mode | stat.S_IXUSR)
    else:
        path.chmod(mode & ~(stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
    return path


def eslint_report(path: Path | str, *messages: dict[str, object]) -> str:
    """Return an ESLint ``--format json`` report for a single file."""

    return json.dumps([{"filePath": str(path), "messages": list(messages)}])


def found(binary: Path) -> ProcessResult:
    """Return a lookup result pointing at ``binary``."""

    return ProcessResult(returncode=0, stdout=f"{binary}\n")

