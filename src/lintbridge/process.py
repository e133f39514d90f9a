# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous wrappers around subprocess execution."""

from __future__ import annotations

import asyncio
import shlex

# Bandit: subprocess usage is intentional; the runner is the only place lintbridge spawns processes.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path

from .errors import ShellError
from .models import ProcessResult


def _decode(value: bytes | None) -> str:
    if not value:
        return ""
    return value.decode(errors="replace")


class AsyncProcessRunner:
    """Spawn processes on the running event loop and capture their output."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = dict(env) if env is not None else None

    async def run(
        self,
        executable: Path | str,
        args: Sequence[str] = (),
        *,
        cwd: Path | None = None,
        stdin: str | None = None,
        use_shell: bool = False,
    ) -> ProcessResult:
        """Execute ``executable`` with ``args`` and wait for it to exit.

        Args:
            executable: Program to run.
            args: Arguments passed to the program.
            cwd: Working directory for the child process.
            stdin: Text written to the child's standard input; empty input is not sent.
            use_shell: Run through ``/bin/sh`` so the user's shell resolves interpreters.

        Returns:
            ProcessResult: Exit status and decoded stdout/stderr.

        Raises:
            ShellError: If the process cannot be spawned.
        """

        stdin_pipe = subprocess.PIPE if stdin else subprocess.DEVNULL
        try:
            if use_shell:
                command = shlex.join([str(executable), *args])
                process = await asyncio.create_subprocess_shell(
                    command,
                    cwd=str(cwd) if cwd is not None else None,
                    env=self._env,
                    stdin=stdin_pipe,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                )
            else:
                process = await asyncio.create_subprocess_exec(
                    str(executable),
                    *args,
                    cwd=str(cwd) if cwd is not None else None,
                    env=self._env,
                    stdin=stdin_pipe,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                )
        except OSError as exc:
            raise ShellError(executable, None, str(exc)) from exc

        payload = stdin.encode() if stdin else None
        stdout, stderr = await process.communicate(payload)
        return ProcessResult(
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
        )


__all__ = ["AsyncProcessRunner"]
