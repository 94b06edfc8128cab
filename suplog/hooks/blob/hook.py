"""A hook that uploads the ``blob`` field of entries to S3-compatible storage."""

from __future__ import annotations

import abc
import io
import os
import posixpath
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Protocol

from ...entry import Entry
from ...levels import Level
from .ulid import new_blob_id

DEFAULT_RETENTION_TTL = timedelta(days=30)
"""Default time blobs are kept: one month."""

BLOB_KEY = "blob"


@dataclass
class HookOptions:
    """Settings for the blob hook; empty values are filled from the environment."""

    env: str = ""
    blob_store_url: str = ""
    blob_store_account: str = ""
    blob_store_key: str = ""
    blob_store_endpoint: str = ""
    blob_store_region: str = ""
    blob_store_bucket: str = ""
    blob_retention_ttl: timedelta = timedelta(0)
    blob_enabled_env: Dict[str, bool] = field(default_factory=dict)


_ENV_FIELDS = {
    "blob_store_url": "LOG_BLOB_STORE_URL",
    "blob_store_account": "LOG_BLOB_STORE_ACCOUNT",
    "blob_store_key": "LOG_BLOB_STORE_KEY",
    "blob_store_endpoint": "LOG_BLOB_STORE_ENDPOINT",
    "blob_store_region": "LOG_BLOB_STORE_REGION",
    "blob_store_bucket": "LOG_BLOB_STORE_BUCKET",
}


def check_hook_options(opt: Optional[HookOptions]) -> HookOptions:
    """Fill unset options from the environment and defaults, and return them."""
    if opt is None:
        opt = HookOptions()
    if not opt.env:
        opt.env = os.environ.get("APP_ENV", "") or "local"
    for attr, var in _ENV_FIELDS.items():
        if not getattr(opt, attr):
            setattr(opt, attr, os.environ.get(var, ""))
    if not opt.blob_retention_ttl:
        opt.blob_retention_ttl = DEFAULT_RETENTION_TTL
    if not opt.blob_enabled_env:
        opt.blob_enabled_env = {"prod": True, "staging": True, "test": True}
    return opt


@dataclass
class S3Spec:
    """Description of a stored object."""

    path: str = ""
    key: str = ""
    body: Optional[BinaryIO] = None
    etag: str = ""
    version: str = ""
    updated_at: Optional[datetime] = None
    meta: Optional[Mapping[str, str]] = None
    size: int = 0


class S3Remote(abc.ABC):
    """Access to an S3-compatible bucket."""

    @abc.abstractmethod
    def check_access(self, key: str) -> None:
        """Verify that objects can be written under ``key``; raise if not."""

    @abc.abstractmethod
    def put_object(
        self, key: str, body: BinaryIO, meta: Optional[Mapping[str, str]]
    ) -> S3Spec:
        """Store ``body`` under ``key``; raise on failure."""


class RootLogger(Protocol):
    """Logger the hook reports its own problems to."""

    def warningf(self, format: str, *args: Any) -> None: ...

    def errorf(self, format: str, *args: Any) -> None: ...

    def debugf(self, format: str, *args: Any) -> None: ...

    def printf(self, format: str, *args: Any) -> None: ...


class BlobHook:
    """Replaces an entry's ``blob`` field with a link and uploads its payload."""

    def __init__(
        self,
        logger: RootLogger,
        options: Optional[HookOptions] = None,
        remote: Optional[S3Remote] = None,
    ) -> None:
        self.logger = logger
        self.options = check_hook_options(options)
        self.remote: Optional[S3Remote] = None
        if remote is None:
            logger.errorf("failed to init S3 session: %s", "no S3 remote configured")
            return
        try:
            remote.check_access(self.options.env)
        except Exception as exc:
            logger.errorf("failed to verify S3 remote access: %s", exc)
            return
        self.remote = remote

    def levels(self) -> List[Level]:
        return list(Level)

    def fire(self, entry: Entry) -> None:
        if BLOB_KEY not in entry.data:
            return
        blob = entry.data[BLOB_KEY]
        opt = self.options

        if self.remote is None:
            self.logger.warningf("blob provided but S3 remote is disabled")
            del entry.data[BLOB_KEY]
            return
        if not opt.blob_enabled_env.get(opt.env, False):
            self.logger.debugf(
                "blob provided but uploading is disabled in %s", opt.env
            )
            del entry.data[BLOB_KEY]
            return

        if isinstance(blob, str):
            payload = blob.encode("utf-8")
        elif isinstance(blob, (bytes, bytearray, memoryview)):
            payload = bytes(blob)
        else:
            del entry.data[BLOB_KEY]
            return

        blob_id = new_blob_id()
        prefix = opt.blob_store_url or opt.env
        entry.data[BLOB_KEY] = f"{prefix}/{blob_id}"
        self._upload(blob_id, payload)

    def _upload(self, blob_id: str, payload: bytes) -> None:
        object_key = posixpath.join(self.options.env, blob_id)
        try:
            self.remote.put_object(object_key, io.BytesIO(payload), None)
        except Exception as exc:
            self.logger.errorf(
                "failed to upload blob to S3 remote server: key %s in %s: %s",
                object_key,
                self.options.blob_store_bucket,
                exc,
            )