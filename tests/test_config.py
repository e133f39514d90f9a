# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for layered settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintbridge.config import Settings, default_storage_path, load_settings
from lintbridge.errors import ConfigError


def test_defaults_without_sources(tmp_path: Path) -> None:
    settings = load_settings(tmp_path, env={})

    assert settings == Settings(storage_path=settings.storage_path)
    assert settings.package == "eslint"
    assert settings.runtime == "node"
    assert settings.throttle_seconds == 60.0
    assert not settings.disabled


def test_pyproject_section_is_applied(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[project]
name = "demo"

[tool.lintbridge]
throttle_seconds = 5
lookup = "bin/npm-which"
""".strip(),
        encoding="utf-8",
    )

    settings = load_settings(tmp_path, env={})

    assert settings.throttle_seconds == 5
    assert settings.lookup == tmp_path / "bin" / "npm-which"


def test_local_file_overrides_pyproject_and_env_overrides_both(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.lintbridge]\npackage = "eslint-a"\nruntime = "nodejs"\n', encoding="utf-8")
    (tmp_path / ".lintbridge.toml").write_text('package = "eslint-b"\nstorage_path = "cache"\n', encoding="utf-8")

    settings = load_settings(tmp_path, env={"LINTBRIDGE_PACKAGE": "eslint-c", "LINTBRIDGE_DISABLE": "yes"})

    assert settings.package == "eslint-c"
    assert settings.runtime == "nodejs"
    assert settings.storage_path == tmp_path / "cache"
    assert settings.disabled is True


def test_bundled_binaries_are_anchored_to_root(tmp_path: Path) -> None:
    (tmp_path / ".lintbridge.toml").write_text('bundled_binaries = ["bin/helper", "/opt/tool"]\n', encoding="utf-8")

    settings = load_settings(tmp_path, env={})

    assert settings.bundled_binaries == (tmp_path / "bin" / "helper", Path("/opt/tool"))


def test_storage_path_honours_xdg_cache_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))

    assert default_storage_path() == tmp_path / "xdg" / "lintbridge"


@pytest.mark.parametrize(
    ("filename", "content"),
    [
        (".lintbridge.toml", "throttle_seconds = -1\n"),
        (".lintbridge.toml", "unknown_option = true\n"),
        (".lintbridge.toml", "package = [\n"),
        ("pyproject.toml", "[tool]\nlintbridge = 3\n"),
    ],
)
def test_invalid_sources_raise_config_error(tmp_path: Path, filename: str, content: str) -> None:
    (tmp_path / filename).write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(tmp_path, env={})


def test_invalid_environment_value_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path, env={"LINTBRIDGE_THROTTLE": "soon"})
