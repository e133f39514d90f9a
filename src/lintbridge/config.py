# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings model and layered configuration sources."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import DEFAULT_PACKAGE, DEFAULT_RUNTIME, DEFAULT_THROTTLE_SECONDS, JAVASCRIPT_SYNTAX_PATTERN
from .errors import ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintbridge"
LOCAL_CONFIG_FILENAME: Final[str] = ".lintbridge.toml"

_ENV_PREFIX: Final[str] = "LINTBRIDGE_"
_ENV_KEYS: Final[dict[str, str]] = {
    "DISABLE": "disabled",
    "PACKAGE": "package",
    "LOOKUP": "lookup",
    "RUNTIME": "runtime",
    "THROTTLE": "throttle_seconds",
    "STORAGE": "storage_path",
}
_PATH_KEYS: Final[frozenset[str]] = frozenset({"lookup", "storage_path"})
_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})


def default_storage_path() -> Path:
    """Return the per-user storage directory used for lint caches."""

    base = os.environ.get("XDG_CACHE_HOME")
    root = Path(base).expanduser() if base else Path.home() / ".cache"
    return root / "lintbridge"


class Settings(BaseModel):
    """Runtime options for the lint integration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    disabled: bool = False
    package: str = DEFAULT_PACKAGE
    lookup: Path | None = None
    runtime: str = DEFAULT_RUNTIME
    throttle_seconds: float = Field(default=DEFAULT_THROTTLE_SECONDS, ge=0)
    storage_path: Path = Field(default_factory=default_storage_path)
    bundled_binaries: tuple[Path, ...] = ()
    javascript_syntax_pattern: str = JAVASCRIPT_SYNTAX_PATTERN

    @field_validator("disabled", mode="before")
    @classmethod
    def _coerce_flag(cls, value: object) -> object:
        """Accept the usual textual spellings of booleans from the environment."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
        return value


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _pyproject_fragment(root: Path) -> dict[str, Any]:
    path = root / PYPROJECT_FILENAME
    if not path.is_file():
        return {}
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return _anchor_paths(dict(section), root)


def _local_fragment(root: Path) -> dict[str, Any]:
    path = root / LOCAL_CONFIG_FILENAME
    if not path.is_file():
        return {}
    return _anchor_paths(_read_toml(path), root)


def _env_fragment(env: Mapping[str, str]) -> dict[str, Any]:
    fragment: dict[str, Any] = {}
    for suffix, key in _ENV_KEYS.items():
        value = env.get(f"{_ENV_PREFIX}{suffix}")
        if value is not None:
            fragment[key] = value
    return fragment


def _anchor_paths(fragment: dict[str, Any], root: Path) -> dict[str, Any]:
    for key in _PATH_KEYS & fragment.keys():
        value = fragment[key]
        if isinstance(value, str):
            candidate = Path(value).expanduser()
            fragment[key] = candidate if candidate.is_absolute() else root / candidate
    binaries = fragment.get("bundled_binaries")
    if isinstance(binaries, list):
        fragment["bundled_binaries"] = [
            item if not isinstance(item, str) or Path(item).is_absolute() else root / item for item in binaries
        ]
    return fragment


def load_settings(root: Path | None = None, *, env: Mapping[str, str] | None = None) -> Settings:
    """Load settings for ``root`` by layering every configuration source.

    Precedence, lowest first: built-in defaults, ``[tool.lintbridge]`` in
    ``pyproject.toml``, ``.lintbridge.toml``, then ``LINTBRIDGE_*`` environment variables.

    Args:
        root: Project directory holding the configuration files. Files are skipped when ``None``.
        env: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        Settings: Validated settings.

    Raises:
        ConfigError: If any source is unreadable or any value is invalid.
    """

    merged: dict[str, Any] = {}
    if root is not None:
        merged.update(_pyproject_fragment(root))
        merged.update(_local_fragment(root))
    merged.update(_env_fragment(os.environ if env is None else env))
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid lintbridge settings: {exc}") from exc


__all__ = [
    "LOCAL_CONFIG_FILENAME",
    "PYPROJECT_SECTION_KEY",
    "Settings",
    "default_storage_path",
    "load_settings",
]
