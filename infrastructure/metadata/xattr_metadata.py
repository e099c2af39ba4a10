"""Object metadata stored as Linux extended attributes.

Attributes live on the inode, so they disappear together with the file and
a removed object never leaves metadata behind.
"""

from __future__ import annotations

import errno
import os
import struct
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from domain.exceptions import MetadataError

if TYPE_CHECKING:
    from pathlib import Path

DELETION_TOKEN_ATTR = "user.snapshelf.dtoken"
EXPIRES_ATTR = "user.snapshelf.expires"

_EXPIRES_FORMAT = ">q"
_MISSING = {errno.ENODATA, errno.ENOENT}


class XattrObjectMetadata:
    def _get(self, path: Path, name: str) -> bytes | None:
        try:
            return os.getxattr(path, name)
        except OSError as e:
            if e.errno in _MISSING:
                return None
            msg = f"Cannot read {name} on {path}: {e.strerror}"
            raise MetadataError(msg) from e

    def read_deletion_token(self, path: Path) -> bytes | None:
        return self._get(path, DELETION_TOKEN_ATTR)

    def write_deletion_token(self, path: Path, token: bytes) -> None:
        os.setxattr(path, DELETION_TOKEN_ATTR, token)

    def read_expiry(self, path: Path) -> datetime | None:
        raw = self._get(path, EXPIRES_ATTR)
        if raw is None:
            return None
        try:
            (seconds,) = struct.unpack(_EXPIRES_FORMAT, raw)
            return datetime.fromtimestamp(seconds, UTC)
        except (struct.error, OverflowError, OSError, ValueError) as e:
            msg = f"Malformed expiration attribute on {path}"
            raise MetadataError(msg) from e

    def write_expiry(self, path: Path, expires_at: datetime) -> None:
        os.setxattr(path, EXPIRES_ATTR, struct.pack(_EXPIRES_FORMAT, int(expires_at.timestamp())))

    def clear_expiry(self, path: Path) -> None:
        try:
            os.removexattr(path, EXPIRES_ATTR)
        except OSError as e:
            if e.errno not in _MISSING:
                raise
