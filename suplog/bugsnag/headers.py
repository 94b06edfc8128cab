"""HTTP headers sent with every report."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict


def prefixed_headers(api_key: str, payload_version: str) -> Dict[str, str]:
    """Return the content type and the prefixed API key, payload version and send time."""
    return {
        "Content-Type": "application/json",
        "Bugsnag-Api-Key": api_key,
        "Bugsnag-Payload-Version": payload_version,
        "Bugsnag-Sent-At": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }