"""Settings that control how errors are reported."""

from __future__ import annotations

import dataclasses
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Pattern, Protocol, Tuple


class Printer(Protocol):
    """Anything with a printf-style output method."""

    def printf(self, format: str, *args: Any) -> None: ...


class EndpointConfigError(ValueError):
    """Raised when a sessions endpoint is set without a notify endpoint."""


@dataclass
class Endpoints:
    """The HTTP endpoints reports and sessions are sent to."""

    sessions: str = ""
    notify: str = ""


@dataclass
class Configuration:
    """Reporting settings; unset values are left alone by ``update``."""

    api_key: str = ""
    endpoint: str = ""
    endpoints: Endpoints = field(default_factory=Endpoints)
    release_stage: str = ""
    app_type: str = ""
    app_version: str = ""
    auto_capture_sessions: Any = None
    hostname: str = ""
    notify_release_stages: Optional[List[str]] = None
    project_packages: Optional[List[str]] = None
    source_root: str = ""
    params_filters: Optional[List[str]] = None
    panic_handler: Optional[Callable[[], None]] = None
    logger: Optional[Printer] = None
    transport: Any = None
    synchronous: bool = False
    flush_sessions_on_repanic: bool = False

    def update(self, other: "Configuration") -> "Configuration":
        """Copy the values set in ``other`` into this configuration."""
        for name in ("api_key", "hostname", "app_type", "app_version",
                     "source_root", "release_stage"):
            value = getattr(other, name)
            if value != "":
                setattr(self, name, value)
        for name in ("params_filters", "project_packages", "logger",
                     "notify_release_stages", "panic_handler", "transport",
                     "auto_capture_sessions"):
            value = getattr(other, name)
            if value is not None:
                setattr(self, name, value)
        if other.synchronous:
            self.synchronous = True
        self.update_endpoints(other.endpoint, other.endpoints)
        return self

    def is_auto_capture_sessions(self) -> bool:
        """Return whether sessions are captured automatically (the default)."""
        if self.auto_capture_sessions is None:
            return True
        if isinstance(self.auto_capture_sessions, bool):
            return self.auto_capture_sessions
        return False

    def update_endpoints(self, endpoint: str, endpoints: Endpoints) -> None:
        """Apply endpoint settings, warning about incomplete ones."""
        if endpoint:
            self.logf(
                "WARNING: the 'Endpoint' Bugsnag configuration parameter is "
                "deprecated in favor of 'Endpoints'"
            )
            self.endpoints.notify = endpoint
            self.endpoints.sessions = ""
        if endpoints.notify:
            self.endpoints.notify = endpoints.notify
            if not endpoints.sessions:
                self.logf(
                    "WARNING: Bugsnag notify endpoint configured without also "
                    "configuring the sessions endpoint. No sessions will be recorded"
                )
                self.endpoints.sessions = ""
        if endpoints.sessions:
            if not endpoints.notify:
                raise EndpointConfigError(
                    "FATAL: Bugsnag sessions endpoint configured without also "
                    "changing the notify endpoint. Bugsnag cannot identify where "
                    "to report errors"
                )
            self.endpoints.sessions = endpoints.sessions

    def merge(self, other: "Configuration") -> "Configuration":
        """Return a copy of this configuration updated with ``other``."""
        return self.clone().update(other)

    def clone(self) -> "Configuration":
        """Return a shallow copy that owns its own endpoints."""
        return dataclasses.replace(self, endpoints=dataclasses.replace(self.endpoints))

    def is_project_package(self, pkg: str) -> bool:
        """Return whether ``pkg`` matches one of the project package patterns."""
        for pattern in self.project_packages or ():
            directory, _, last = pattern.rpartition("/")
            if last == "**" and pkg.startswith(directory + "/" if directory or "/" in pattern else ""):
                return True
            if _glob_match(pattern, pkg):
                return True
        return False

    def strip_project_packages(self, file: str) -> str:
        """Remove the source root and project package prefix from ``file``."""
        trimmed = file
        if trimmed.startswith(self.source_root):
            trimmed = trimmed[len(self.source_root):]
        for prefix in self.project_packages or ():
            if len(prefix) > 2 and prefix.endswith("/*"):
                prefix = prefix[:-1]
            elif prefix.endswith("**"):
                prefix = prefix[:-2]
            else:
                prefix = prefix + "/"
            if trimmed.startswith(prefix):
                return trimmed[len(prefix):]
        return trimmed

    def logf(self, fmt: str, *args: Any) -> None:
        """Write a message to the configured logger, or to standard error."""
        if self.logger is not None:
            self.logger.printf(fmt, *args)
            return
        message = fmt % args if args else fmt
        if not message.endswith("\n"):
            message += "\n"
        sys.stderr.write(message)

    def notify_in_release_stage(self) -> bool:
        """Return whether reports are sent in the current release stage."""
        if self.notify_release_stages is None:
            return True
        if self.release_stage == "":
            return True
        return self.release_stage in self.notify_release_stages


class _BadPattern(Exception):
    pass


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    if i >= len(pattern) or pattern[i] in "-]":
        raise _BadPattern
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            raise _BadPattern
    return pattern[i], i + 1


def _glob_regex(pattern: str) -> Pattern[str]:
    parts: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "\\":
            if i >= n:
                raise _BadPattern
            parts.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            negate = i < n and pattern[i] == "^"
            if negate:
                i += 1
            ranges: List[str] = []
            while True:
                if i < n and pattern[i] == "]" and ranges:
                    i += 1
                    break
                lo, i = _class_char(pattern, i)
                hi = lo
                if i < n and pattern[i] == "-":
                    hi, i = _class_char(pattern, i + 1)
                if hi < lo:
                    raise _BadPattern
                ranges.append(f"{re.escape(lo)}-{re.escape(hi)}")
            parts.append("[" + ("^" if negate else "") + "".join(ranges) + "]")
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.DOTALL)


def _glob_match(pattern: str, name: str) -> bool:
    """Match like a shell glob where wildcards never cross a ``/``."""
    try:
        regex = _glob_regex(pattern)
    except _BadPattern:
        return False
    return regex.fullmatch(name) is not None