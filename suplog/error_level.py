"""Raise an entry's level when it carries an error."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .entry import ERROR_KEY, Entry
from .levels import Level


class _ErrLevelKey:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<error level key>"


_ERR_LEVEL_KEY = _ErrLevelKey()


def with_error_level(
    context: Optional[Mapping[Any, Any]], level: Level
) -> Dict[Any, Any]:
    """Return a copy of ``context`` asking for ``level`` when an error is present."""
    result = dict(context or {})
    result[_ERR_LEVEL_KEY] = level
    return result


class ErrorLevelHook:
    """Promotes entries that carry an error to the level stored in their context."""

    def levels(self) -> List[Level]:
        return list(Level)

    def fire(self, entry: Entry) -> None:
        if entry is None:
            return
        level = (entry.context or {}).get(_ERR_LEVEL_KEY)
        if not isinstance(level, Level):
            return
        if not isinstance(entry.data.get(ERROR_KEY), BaseException):
            return
        if level < entry.level:
            entry.level = level