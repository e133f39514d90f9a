# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Service interfaces for the editor collaborators lintbridge drives."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import Diagnostic, ProcessResult


@runtime_checkable
class ProcessRunner(Protocol):
    """Asynchronous subprocess execution facility."""

    async def run(
        self,
        executable: Path | str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
        stdin: str | None = None,
        use_shell: bool = False,
    ) -> ProcessResult:
        """Run ``executable`` and return its exit status and captured output.

        Raises:
            ShellError: When the process could not be spawned.
        """

        raise NotImplementedError


@runtime_checkable
class TextDocument(Protocol):
    """Document snapshot supplied by the editor for one lint cycle."""

    @property
    def uri(self) -> str:
        """Return the stable document identifier."""

        raise NotImplementedError

    @property
    def path(self) -> Path | None:
        """Return the document's filesystem path, if it has one."""

        raise NotImplementedError

    @property
    def text(self) -> str:
        """Return the current (possibly unsaved) document text."""

        raise NotImplementedError

    @property
    def syntax(self) -> str:
        """Return the editor's syntax tag for the document."""

        raise NotImplementedError

    @property
    def is_untitled(self) -> bool:
        """Return whether the document was never saved."""

        raise NotImplementedError

    @property
    def is_remote(self) -> bool:
        """Return whether the document lives on a remote filesystem."""

        raise NotImplementedError


@runtime_checkable
class Workspace(Protocol):
    """Document provider answering open/closed questions."""

    def documents(self) -> Iterable[TextDocument]:
        """Return every document currently open in an editor."""

        raise NotImplementedError

    def is_closed(self, uri: str) -> bool:
        """Return whether no editor shows the document identified by ``uri``."""

        raise NotImplementedError


@runtime_checkable
class DiagnosticsCollection(Protocol):
    """Passive keyed store read by the editor's presentation layer."""

    def set(self, key: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the diagnostics published for ``key``."""

        raise NotImplementedError

    def remove(self, key: str) -> None:
        """Drop the diagnostics published for ``key``."""

        raise NotImplementedError

    def has(self, key: str) -> bool:
        """Return whether diagnostics are published for ``key``."""

        raise NotImplementedError

    def get(self, key: str) -> Sequence[Diagnostic]:
        """Return the diagnostics published for ``key`` (empty when absent)."""

        raise NotImplementedError

    def clear(self) -> None:
        """Drop every published diagnostic."""

        raise NotImplementedError


@runtime_checkable
class FileOpener(Protocol):
    """Open a file in the editor."""

    def open_file(self, path: Path) -> None:
        """Open ``path`` for the user."""

        raise NotImplementedError


@runtime_checkable
class Notifier(Protocol):
    """Show a short, non-modal notification."""

    def notify(self, identifier: str, message: str) -> None:
        """Display ``message`` under the notification ``identifier``."""

        raise NotImplementedError


__all__ = [
    "DiagnosticsCollection",
    "FileOpener",
    "Notifier",
    "ProcessRunner",
    "TextDocument",
    "Workspace",
]
