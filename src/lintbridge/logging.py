# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging
import sys
from functools import cache

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

_PACKAGE_LOGGER = "lintbridge"


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def get_console(*, color: bool = True, stderr: bool = False) -> Console:
    """Return a cached Rich console for the requested presentation flags.

    Args:
        color: ``True`` when ANSI colour output may be used.
        stderr: ``True`` to bind the console to standard error.

    Returns:
        Console: Console shared by every caller passing the same flags.
    """

    return Console(no_color=not color, stderr=stderr, highlight=False, soft_wrap=True)


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool, symbol: str) -> None:
    color = detect_tty()
    text = Text(f"{emoji(symbol, use_emoji)}{msg}")
    if color:
        text.stylize(style)
    get_console(color=color).print(text)


def info(msg: str, *, use_emoji: bool = False) -> None:
    """Emit an informational message."""

    _print_line(msg, style="cyan", use_emoji=use_emoji, symbol="ℹ️ ")


def ok(msg: str, *, use_emoji: bool = False) -> None:
    """Emit a success message."""

    _print_line(msg, style="green", use_emoji=use_emoji, symbol="✅ ")


def warn(msg: str, *, use_emoji: bool = False) -> None:
    """Emit a warning message."""

    _print_line(msg, style="yellow", use_emoji=use_emoji, symbol="⚠️ ")


def fail(msg: str, *, use_emoji: bool = False) -> None:
    """Emit an error message."""

    _print_line(msg, style="red", use_emoji=use_emoji, symbol="❌ ")


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a Rich handler to the package logger once.

    Args:
        verbose: Lower the threshold to ``DEBUG`` when true.

    Returns:
        logging.Logger: The configured ``lintbridge`` logger.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=get_console(color=detect_tty(), stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


class RepeatFilter:
    """Swallow consecutive duplicates of the same warning message."""

    def __init__(self) -> None:
        self._last: str | None = None

    def warn(self, logger: logging.Logger, message: str) -> bool:
        """Log ``message`` unless it repeats the previous one.

        Args:
            logger: Logger receiving the warning.
            message: Warning text.

        Returns:
            bool: ``True`` when the message was logged.
        """

        if message == self._last:
            return False
        self._last = message
        logger.warning(message)
        return True


__all__ = [
    "RepeatFilter",
    "configure_logging",
    "detect_tty",
    "emoji",
    "fail",
    "get_console",
    "info",
    "ok",
    "warn",
]
