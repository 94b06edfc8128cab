"""Universally unique, lexicographically sortable identifiers for blobs."""

from __future__ import annotations

import random
import threading
import time

_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

MAX_TIMESTAMP = (1 << 48) - 1
"""Largest millisecond timestamp a ULID can hold."""

ENTROPY_SIZE = 10
"""Number of random bytes in a ULID."""

ULID_LENGTH = 26
"""Length of the textual form of a ULID."""

_rng = random.Random(time.time_ns())
_rng_lock = threading.Lock()


def encode_ulid(timestamp_ms: int, entropy: bytes) -> str:
    """Encode a millisecond timestamp and 10 bytes of entropy as a ULID string."""
    if not 0 <= timestamp_ms <= MAX_TIMESTAMP:
        raise ValueError(f"timestamp out of range: {timestamp_ms}")
    entropy = bytes(entropy)
    if len(entropy) != ENTROPY_SIZE:
        raise ValueError(
            f"entropy must be {ENTROPY_SIZE} bytes, got {len(entropy)}"
        )
    value = (timestamp_ms << 80) | int.from_bytes(entropy, "big")
    return "".join(
        _ALPHABET[(value >> shift) & 0x1F] for shift in range(125, -5, -5)
    )


def new_blob_id() -> str:
    """Return a new pseudo-random ULID stamped with the current time."""
    timestamp_ms = time.time_ns() // 1_000_000
    with _rng_lock:
        entropy = _rng.randbytes(ENTROPY_SIZE)
    return encode_ulid(timestamp_ms, entropy)