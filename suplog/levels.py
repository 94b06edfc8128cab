"""Logging severity levels."""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """Severity of a log entry; lower values are more severe."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6

    def __str__(self) -> str:
        return _LEVEL_NAMES[self]


_LEVEL_NAMES = {
    Level.PANIC: "panic",
    Level.FATAL: "fatal",
    Level.ERROR: "error",
    Level.WARN: "warning",
    Level.INFO: "info",
    Level.DEBUG: "debug",
    Level.TRACE: "trace",
}

_NAME_TO_LEVEL = {
    "panic": Level.PANIC,
    "fatal": Level.FATAL,
    "error": Level.ERROR,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "info": Level.INFO,
    "debug": Level.DEBUG,
    "trace": Level.TRACE,
}


def parse_level(level_name: str) -> Level:
    """Return the level named by ``level_name`` (case-insensitive)."""
    try:
        return _NAME_TO_LEVEL[level_name.lower()]
    except KeyError:
        raise ValueError(f"not a valid output Level: {level_name}") from None