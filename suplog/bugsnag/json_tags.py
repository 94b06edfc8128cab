"""Parsing of ``json`` field tags: a name followed by comma-separated options."""

from __future__ import annotations

from typing import Tuple


class TagOptions(str):
    """The options following the first comma of a tag, without that comma."""

    def contains(self, option_name: str) -> bool:
        """Return whether ``option_name`` is one of the comma-separated options."""
        if not self:
            return False
        parts = self.split(",")
        # a trailing comma does not introduce an empty option
        if len(parts) > 1 and parts[-1] == "":
            parts.pop()
        return option_name in parts


def parse_tag(tag: str) -> Tuple[str, TagOptions]:
    """Split a tag into its name and its options."""
    name, comma, options = tag.partition(",")
    if not comma:
        return tag, TagOptions("")
    return name, TagOptions(options)