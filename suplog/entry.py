"""Log entries and the hook protocol that processes them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Protocol, runtime_checkable

from .levels import Level

ERROR_KEY = "error"
"""Field name under which an error is attached to an entry."""


@dataclass
class Entry:
    """A single log record: its fields, level, message, time and context."""

    data: Dict[str, Any] = field(default_factory=dict)
    level: Level = Level.INFO
    message: str = ""
    time: datetime = field(default_factory=datetime.now)
    context: Mapping[Any, Any] = field(default_factory=dict)

    def with_data(self, key: str, value: Any) -> "Entry":
        """Return a copy of this entry with ``key`` set to ``value``."""
        data = dict(self.data)
        data[key] = value
        return dataclasses.replace(self, data=data)


@runtime_checkable
class Hook(Protocol):
    """Something that inspects or rewrites entries before they are written."""

    def levels(self) -> Iterable[Level]:
        """Levels at which the hook fires."""
        ...

    def fire(self, entry: Entry) -> None:
        """Process ``entry`` in place."""
        ...