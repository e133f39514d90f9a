# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the open-config and open-ignore commands."""

from __future__ import annotations

from pathlib import Path

from lintbridge.commands import (
    NO_CONFIG_MESSAGE,
    NO_IGNORE_MESSAGE,
    NO_PATH_MESSAGE,
    OPEN_CONFIG_ID,
    OPEN_IGNORE_ID,
    open_config,
    open_ignore,
)

from tests.helpers.fakes import RecordingNotifier, RecordingOpener


def test_open_config_opens_cascade(home: Path, project: Path) -> None:
    outer = home / ".eslintrc.yml"
    outer.write_text("root: true\n", encoding="utf-8")
    opener, notifier = RecordingOpener(), RecordingNotifier()

    opened = open_config(project / "src" / "a.js", opener=opener, notifier=notifier, home=home)

    assert opened == opener.opened == [project / ".eslintrc.json", outer]
    assert notifier.messages == []


def test_open_config_nearest_only(home: Path, project: Path) -> None:
    (home / ".eslintrc.yml").write_text("root: true\n", encoding="utf-8")
    opener = RecordingOpener()

    open_config(project / "src" / "a.js", opener=opener, notifier=RecordingNotifier(), home=home, cascade=False)

    assert opener.opened == [project / ".eslintrc.json"]


def test_open_config_falls_back_to_workspace_path(home: Path, project: Path) -> None:
    opener = RecordingOpener()

    open_config(None, workspace_path=project, opener=opener, notifier=RecordingNotifier(), home=home)

    assert opener.opened == [project / ".eslintrc.json"]


def test_open_config_without_any_path_notifies(home: Path) -> None:
    opener, notifier = RecordingOpener(), RecordingNotifier()

    assert open_config(None, opener=opener, notifier=notifier, home=home) == []
    assert notifier.messages == [(OPEN_CONFIG_ID, NO_PATH_MESSAGE)]
    assert opener.opened == []


def test_open_config_without_match_notifies(home: Path) -> None:
    notifier = RecordingNotifier()

    open_config(home / "a.js", opener=RecordingOpener(), notifier=notifier, home=home)

    assert notifier.messages == [(OPEN_CONFIG_ID, NO_CONFIG_MESSAGE)]


def test_open_ignore_opens_nearest(home: Path, project: Path) -> None:
    ignore = project / ".eslintignore"
    ignore.write_text("dist/\n", encoding="utf-8")
    opener = RecordingOpener()

    assert open_ignore(project / "src" / "a.js", opener=opener, notifier=RecordingNotifier(), home=home) == ignore
    assert opener.opened == [ignore]


def test_open_ignore_notifications(home: Path, project: Path) -> None:
    notifier = RecordingNotifier()

    assert open_ignore(None, opener=RecordingOpener(), notifier=notifier, home=home) is None
    assert open_ignore(project / "src" / "a.js", opener=RecordingOpener(), notifier=notifier, home=home) is None
    assert notifier.messages == [(OPEN_IGNORE_ID, NO_PATH_MESSAGE), (OPEN_IGNORE_ID, NO_IGNORE_MESSAGE)]
