"""Facts about the host and runtime the program runs on."""

from __future__ import annotations

import platform
import socket
import threading
from dataclasses import dataclass, field
from typing import Optional

_hostname = ""
_versions: Optional["RuntimeVersions"] = None
_lock = threading.Lock()


def get_hostname() -> str:
    """Return the host name, cached after the first lookup; empty if unknown."""
    global _hostname
    if not _hostname:
        try:
            _hostname = socket.gethostname()
        except OSError:
            _hostname = ""
    return _hostname


@dataclass
class RuntimeVersions:
    """Versions of the language runtime and of supported frameworks."""

    python: str = field(default_factory=platform.python_version)
    gin: str = ""
    martini: str = ""
    negroni: str = ""
    revel: str = ""


_FRAMEWORK_FIELDS = {
    "Martini": "martini",
    "Gin": "gin",
    "Negroni": "negroni",
    "Revel": "revel",
}


def get_runtime_versions() -> RuntimeVersions:
    """Return the shared record of runtime versions."""
    global _versions
    with _lock:
        if _versions is None:
            _versions = RuntimeVersions()
        return _versions


def add_version(framework: str, version: str) -> None:
    """Record the version of a supported framework; others are ignored."""
    versions = get_runtime_versions()
    attr = _FRAMEWORK_FIELDS.get(framework)
    if attr is not None:
        with _lock:
            setattr(versions, attr, version)


def reset_runtime_versions() -> None:
    """Forget all recorded versions."""
    global _versions
    with _lock:
        _versions = None