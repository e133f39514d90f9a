# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from tests.helpers.fakes import make_binary


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return a fake home directory acting as the resolution boundary."""

    directory = tmp_path / "home"
    directory.mkdir()
    return directory


@pytest.fixture
def project(home: Path) -> Path:
    """Return a project directory with an ESLint configuration file."""

    root = home / "project"
    (root / "src").mkdir(parents=True)
    (root / ".eslintrc.json").write_text("{}", encoding="utf-8")
    return root


@pytest.fixture
def eslint_binary(project: Path) -> Path:
    """Return an executable placeholder for the project's local ESLint."""

    return make_binary(project / "node_modules" / ".bin" / "eslint")


@pytest.fixture
def lookup_binary(tmp_path: Path) -> Path:
    """Return an executable placeholder for the lookup tool."""

    return make_binary(tmp_path / "bin" / "npm-which")


@pytest.fixture
def runtime_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the interpreter runtime is on ``PATH``."""

    monkeypatch.setattr("lintbridge.binaries.find_in_path", lambda *names: True)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo CLI logging configuration so ``caplog`` keeps seeing package records."""

    logger = logging.getLogger("lintbridge")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)
