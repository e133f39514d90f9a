# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for binary lookup and helper binary permissions."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from lintbridge.binaries import BinaryLocator, RuntimeProbe, make_executable
from lintbridge.errors import ShellError
from lintbridge.models import ProcessResult

from tests.helpers.fakes import FakeRunner, found, make_binary


def test_make_executable_sets_bits(tmp_path: Path) -> None:
    binary = make_binary(tmp_path / "helper", executable=False)

    assert make_executable([binary]) == 1
    assert os.access(binary, os.X_OK)
    assert make_executable([binary]) == 0


def test_make_executable_reports_missing_binary(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Can't locate extension binaries"):
        make_executable([tmp_path / "missing"])


def test_runtime_probe_caches_only_positive_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter([False, True])
    calls: list[tuple[str, ...]] = []

    def fake_find(*names: str) -> bool:
        calls.append(names)
        return next(answers)

    monkeypatch.setattr("lintbridge.binaries.find_in_path", fake_find)
    probe = RuntimeProbe("node")

    assert probe.available() is False
    assert probe.available() is True
    assert probe.available() is True
    assert calls == [("node",), ("node",)]


@pytest.mark.asyncio
async def test_locate_returns_first_stdout_line(tmp_path: Path, lookup_binary: Path) -> None:
    eslint = make_binary(tmp_path / "node_modules" / ".bin" / "eslint")
    runner = FakeRunner(lookup=ProcessResult(returncode=0, stdout=f"{eslint}\nextra\n"))
    locator = BinaryLocator(runner, lookup=lookup_binary)

    assert await locator.locate(tmp_path) == eslint
    call = runner.calls[0]
    assert call.executable == lookup_binary
    assert call.args == ("eslint",)
    assert call.cwd == tmp_path
    assert call.use_shell is True


@pytest.mark.asyncio
async def test_locate_anchors_relative_output(tmp_path: Path, lookup_binary: Path) -> None:
    runner = FakeRunner(lookup=ProcessResult(returncode=0, stdout="node_modules/.bin/eslint\n"))
    locator = BinaryLocator(runner, lookup=lookup_binary)

    assert await locator.locate(tmp_path) == tmp_path / "node_modules" / ".bin" / "eslint"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "result",
    [
        ProcessResult(returncode=1, stderr="eslint not found"),
        ProcessResult(returncode=0, stdout=""),
        ProcessResult(returncode=0, stdout="usage: npm-which <command>\n"),
    ],
)
async def test_locate_not_found_cases(tmp_path: Path, lookup_binary: Path, result: ProcessResult) -> None:
    locator = BinaryLocator(FakeRunner(lookup=result), lookup=lookup_binary)

    assert await locator.locate(tmp_path) is None


@pytest.mark.asyncio
async def test_locate_raises_shell_error_for_other_exit_codes(tmp_path: Path, lookup_binary: Path) -> None:
    runner = FakeRunner(lookup=ProcessResult(returncode=127, stderr="sh: npm-which: not found"))
    locator = BinaryLocator(runner, lookup=lookup_binary)

    with pytest.raises(ShellError) as excinfo:
        await locator.locate(tmp_path)
    assert excinfo.value.returncode == 127
    # One self-heal retry after the first failure.
    assert len(runner.calls) == 2


@pytest.mark.asyncio
async def test_locate_heals_lookup_permissions_and_retries(tmp_path: Path) -> None:
    lookup = make_binary(tmp_path / "bin" / "npm-which", executable=False)
    eslint = make_binary(tmp_path / "eslint")
    runner = FakeRunner(lookup=[ShellError(lookup, None, "permission denied"), found(eslint)])
    locator = BinaryLocator(runner, lookup=lookup)

    assert await locator.locate(tmp_path) == eslint
    assert os.access(lookup, os.X_OK)


@pytest.mark.asyncio
async def test_locate_does_not_retry_when_lookup_missing(tmp_path: Path) -> None:
    missing = tmp_path / "bin" / "npm-which"
    runner = FakeRunner(lookup=ShellError(missing, None, "no such file"))
    locator = BinaryLocator(runner, lookup=missing)

    with pytest.raises(ShellError):
        await locator.locate(tmp_path)
    assert len(runner.calls) == 1
