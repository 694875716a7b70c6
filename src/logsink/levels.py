"""Severity levels: display names and ANSI colors.

Every mapping here is total over the integers. Unrecognized values
fall back to UNKNOWN with no color rather than raising.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class Level(IntEnum):
    """Ordinal severity of a log record."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60


# ANSI foreground colors
NOCOLOR = 0
BLACK = 30
RED = 31
GREEN = 32
YELLOW = 33
BLUE = 34
PURPLE = 35
CYAN = 36
GRAY = 37

_NAMES: dict[int, str] = {
    Level.TRACE: "TRACE",
    Level.DEBUG: "DEBUG",
    Level.INFO: "INFO",
    Level.WARN: "WARN",
    Level.ERROR: "ERROR",
    Level.FATAL: "FATAL",
}

_COLORS: dict[int, int] = {
    Level.TRACE: CYAN,
    Level.DEBUG: GRAY,
    Level.INFO: GREEN,
    Level.WARN: YELLOW,
    Level.ERROR: RED,
    Level.FATAL: PURPLE,
}


def level_name(level: int) -> str:
    """Display name for a level, "UNKNOWN" if unrecognized."""
    return _NAMES.get(level, "UNKNOWN")


def level_color(level: int) -> int:
    """ANSI color code for a level, NOCOLOR if unrecognized."""
    return _COLORS.get(level, NOCOLOR)


def with_color_level_prefix(level: int, record: bytes) -> bytes:
    """Prefix a record with a colored [LEVEL] tag.

    ESC[<color>;1m selects bold + color, ESC[0m resets.
    """
    prefix = f"\x1b[{level_color(level)};1m[{level_name(level)}]\x1b[0m"
    return prefix.encode("ascii") + record


def from_stdlib_level(levelno: int) -> Level:
    """Map a stdlib logging level onto the nearest Level at or below it."""
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE
