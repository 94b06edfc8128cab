"""Structured logging building blocks: levels, entries, hooks, field helpers, blob offloading and error reports."""

__version__ = "0.1.0"