"""Tabbed meta-data attached to error reports, and its sanitising."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple

from .json_tags import TagOptions, parse_tag

FILTERED = "[FILTERED]"
RECURSION = "[RECURSION]"
NIL = "<nil>"


@dataclass(frozen=True)
class Sanitizer:
    """Removes filtered keys and recursive references from nested data."""

    filters: Tuple[str, ...] = ()
    seen: Tuple[Any, ...] = ()

    def sanitize(self, data: Any) -> Any:
        """Return a JSON-friendly copy of ``data``."""
        if any(data is ancestor for ancestor in self.seen):
            return RECURSION
        if data is None:
            return NIL
        inner = Sanitizer(tuple(self.filters), (*self.seen, data))

        if isinstance(data, (bool, int, float, str)):
            return data
        if isinstance(data, Mapping):
            return inner._sanitize_map(data)
        if dataclasses.is_dataclass(data) and not isinstance(data, type):
            return inner._sanitize_struct(data)
        if isinstance(data, (list, tuple, bytes, bytearray)):
            return [inner.sanitize(item) for item in data]
        return f"[{type(data).__name__}]"

    def _sanitize_map(self, data: Mapping[Any, Any]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in data.items():
            sanitized = self.sanitize(value)
            new_key = str(key)
            if self._should_redact(new_key):
                sanitized = FILTERED
            result[new_key] = sanitized
        return result

    def _sanitize_struct(self, data: Any) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for item in dataclasses.fields(data):
            if item.name.startswith("_"):
                continue
            name = item.name
            opts = TagOptions("")
            tag = item.metadata.get("json", "")
            if tag:
                name, opts = parse_tag(tag)

            if self._should_redact(name):
                result[name] = FILTERED
                continue
            sanitized = self.sanitize(getattr(data, item.name))
            if isinstance(sanitized, str):
                if not (opts.contains("omitempty") and sanitized == ""):
                    result[name] = sanitized
            else:
                result[name] = sanitized
        return result

    def _should_redact(self, key: str) -> bool:
        lowered = key.lower()
        return any(f.lower() in lowered for f in self.filters)


class MetaData(Dict[str, Dict[str, Any]]):
    """Tabs of key/value pairs shown alongside a report."""

    def merge(self, other: Mapping[str, Mapping[str, Any]]) -> None:
        """Merge ``other`` in; its values win for keys present on both sides."""
        for name, tab in other.items():
            if self.get(name) is None:
                self[name] = {}
            self[name].update(tab)

    def add(self, tab: str, key: str, value: Any) -> None:
        """Set ``key`` in ``tab``, creating the tab if needed."""
        if self.get(tab) is None:
            self[tab] = {}
        self[tab][key] = value

    def add_struct(self, tab: str, obj: Any) -> None:
        """Make a tab from the public fields of ``obj``.

        Values that are not structures go under the ``Extra data`` tab.
        """
        content = Sanitizer().sanitize(obj)
        if isinstance(content, dict):
            self[tab] = content
        else:
            self.add("Extra data", tab, obj)

    def sanitize(self, filters: Iterable[str]) -> Any:
        """Return a copy with filtered keys redacted and recursion broken."""
        return Sanitizer(tuple(filters)).sanitize(self)