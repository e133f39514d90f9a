# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the asynchronous subprocess runner."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from lintbridge.errors import ShellError
from lintbridge.process import AsyncProcessRunner

ECHO_STDIN = "import sys; data = sys.stdin.read(); print(data.upper()); sys.exit(1 if data else 0)"


@pytest.mark.asyncio
async def test_run_feeds_stdin_and_captures_output(tmp_path: Path) -> None:
    result = await AsyncProcessRunner().run(sys.executable, ["-c", ECHO_STDIN], cwd=tmp_path, stdin="let x;")

    assert result.returncode == 1
    assert result.first_line == "LET X;"


@pytest.mark.asyncio
async def test_run_without_stdin_closes_input(tmp_path: Path) -> None:
    result = await AsyncProcessRunner().run(sys.executable, ["-c", ECHO_STDIN], cwd=tmp_path)

    assert result.returncode == 0
    assert result.first_line == ""


@pytest.mark.asyncio
async def test_run_uses_working_directory(tmp_path: Path) -> None:
    result = await AsyncProcessRunner().run(sys.executable, ["-c", "import os; print(os.getcwd())"], cwd=tmp_path)

    assert Path(result.first_line).resolve() == tmp_path.resolve()


@pytest.mark.asyncio
async def test_shell_mode_reports_missing_command_via_exit_status(tmp_path: Path) -> None:
    result = await AsyncProcessRunner().run(tmp_path / "missing-tool", ["eslint"], cwd=tmp_path, use_shell=True)

    assert result.returncode == 127
    assert result.stderr


@pytest.mark.asyncio
async def test_unspawnable_executable_raises_shell_error(tmp_path: Path) -> None:
    with pytest.raises(ShellError) as excinfo:
        await AsyncProcessRunner().run(tmp_path / "missing-tool", [], cwd=tmp_path)

    assert excinfo.value.returncode is None
    assert excinfo.value.executable == tmp_path / "missing-tool"
