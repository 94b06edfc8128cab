"""Fields whose values are read when the entry fires, not when it is built."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, List

from .entry import Entry
from .levels import Level

DEFERRED_FIELD_KEY = "::deferred::"

_SUPPORTED_TYPES = (BaseException, str, bool, int, float, timedelta, complex)


@dataclass
class Ref:
    """A mutable cell whose value is resolved when the entry is logged."""

    value: Any = None


def deferred_key(key: str) -> str:
    """Return the field name under which a deferred ``key`` is stored."""
    return DEFERRED_FIELD_KEY + key


class DeferredHook:
    """Replaces deferred fields with the current values of their references."""

    def levels(self) -> List[Level]:
        return list(Level)

    def fire(self, entry: Entry) -> None:
        if entry is None:
            return
        for name, raw in list(entry.data.items()):
            if not name.startswith(DEFERRED_FIELD_KEY):
                continue
            del entry.data[name]
            key = name[len(DEFERRED_FIELD_KEY):]
            if raw is None:
                continue
            if isinstance(raw, Ref):
                value = raw.value
                if value is None:
                    continue
                if not isinstance(value, _SUPPORTED_TYPES):
                    value = f"<unsupported Ref[{type(value).__name__}]>"
            else:
                value = f"<unsupported {type(raw).__name__}>"
            entry.data[key] = value