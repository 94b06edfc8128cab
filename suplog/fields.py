"""Helpers for building field mappings."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def copy_fields(fields: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a shallow copy of ``fields``; ``None`` gives an empty dict."""
    return dict(fields or {})


def with_more(
    fields: Optional[Mapping[str, Any]], add: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """Return a copy of ``fields`` updated with ``add``."""
    result = copy_fields(fields)
    result.update(add or {})
    return result