# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Command line entry point running lint cycles against files on disk."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path

import typer
from rich import box
from rich.table import Table

from .commands import ConsoleNotifier, open_config, open_ignore
from .config import Settings, load_settings
from .errors import ConfigError
from .logging import configure_logging, detect_tty, fail, get_console, ok
from .models import DiagnosticSet, DocumentSnapshot
from .orchestrator import LintOrchestrator
from .process import AsyncProcessRunner
from .severity import Severity

EXIT_CLEAN = 0
EXIT_ISSUES = 1
EXIT_CONFIG_ERROR = 2

app = typer.Typer(
    help="Live ESLint diagnostics for editors, usable from the shell.",
    no_args_is_help=True,
    add_completion=False,
)


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_ISSUES) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


class FileWorkspace:
    """Workspace whose open documents are a fixed set of files read from disk."""

    def __init__(self, documents: Iterable[DocumentSnapshot]) -> None:
        self._documents = {document.uri: document for document in documents}

    def documents(self) -> list[DocumentSnapshot]:
        return list(self._documents.values())

    def is_closed(self, uri: str) -> bool:
        return uri not in self._documents


class EchoOpener:
    """File opener that prints each path for the calling shell."""

    def open_file(self, path: Path) -> None:
        typer.echo(str(path))


def _load(root: Path) -> Settings:
    try:
        return load_settings(root)
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=EXIT_CONFIG_ERROR) from exc


def _snapshots(files: Sequence[Path]) -> list[DocumentSnapshot]:
    snapshots: list[DocumentSnapshot] = []
    for path in files:
        try:
            snapshots.append(DocumentSnapshot.from_file(path))
        except (OSError, UnicodeDecodeError) as exc:
            raise CLIError(f"cannot read {path}: {exc}", exit_code=EXIT_CONFIG_ERROR) from exc
    return snapshots


async def _lint_documents(settings: Settings, documents: Sequence[DocumentSnapshot]) -> list[DiagnosticSet]:
    orchestrator = LintOrchestrator(
        settings,
        FileWorkspace(documents),
        runner=AsyncProcessRunner(),
        notifier=ConsoleNotifier(),
    )
    orchestrator.activate()
    try:
        await orchestrator.lint_all()
        return [
            DiagnosticSet(key=str(document.path), diagnostics=list(orchestrator.collection.get(document.uri)))
            for document in documents
        ]
    finally:
        orchestrator.deactivate()


def _render(results: Sequence[DiagnosticSet]) -> None:
    color = detect_tty()
    console = get_console(color=color)
    for result in results:
        if not result.diagnostics:
            continue
        table = Table(title=result.key, title_justify="left", box=box.SIMPLE_HEAVY if color else box.SIMPLE)
        table.add_column("Line", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Severity")
        table.add_column("Rule", no_wrap=True)
        table.add_column("Message", overflow="fold")
        for diagnostic in sorted(result.diagnostics, key=lambda item: (item.line, item.column)):
            table.add_row(
                str(diagnostic.line),
                str(diagnostic.column),
                diagnostic.severity.value,
                diagnostic.code or "-",
                diagnostic.message,
            )
        console.print(table)


@app.command("lint")
def lint_command(
    files: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Files to lint."),
    root: Path | None = typer.Option(
        None, "--root", "-r", help="Project root holding lintbridge settings (defaults to the current directory)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Lint files through the same cycle an editor session runs."""

    configure_logging(verbose=verbose)
    try:
        settings = _load(root if root is not None else Path.cwd())
        documents = _snapshots(files)
    except CLIError as exc:
        fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    results = asyncio.run(_lint_documents(settings, documents))
    if not any(result.diagnostics for result in results):
        ok("No issues found.")
        raise typer.Exit(code=EXIT_CLEAN)
    _render(results)
    errors = sum(result.error_count for result in results)
    warnings = sum(len(result.diagnostics) for result in results) - errors
    typer.echo(f"{errors} {Severity.ERROR.value}(s), {warnings} {Severity.WARNING.value}(s)")
    raise typer.Exit(code=EXIT_ISSUES if errors else EXIT_CLEAN)


@app.command("config")
def config_command(
    path: Path = typer.Argument(..., help="File or directory to resolve from."),
    show_all: bool = typer.Option(False, "--all", "-a", help="Print the whole configuration cascade."),
) -> None:
    """Print the ESLint configuration governing PATH."""

    found = open_config(path, opener=EchoOpener(), notifier=ConsoleNotifier(), cascade=show_all)
    if not found:
        raise typer.Exit(code=EXIT_ISSUES)


@app.command("ignore")
def ignore_command(
    path: Path = typer.Argument(..., help="File or directory to resolve from."),
) -> None:
    """Print the ESLint ignore file governing PATH."""

    if open_ignore(path, opener=EchoOpener(), notifier=ConsoleNotifier()) is None:
        raise typer.Exit(code=EXIT_ISSUES)


__all__ = ["CLIError", "EchoOpener", "FileWorkspace", "app"]
