from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path


class ObjectMetadata(Protocol):
    """Out-of-band attributes attached to a stored file.

    Metadata lives with the file itself, so removing the file removes its
    metadata. Reads return None when the file or the attribute is missing.
    """

    def read_deletion_token(self, path: Path) -> bytes | None: ...
    def write_deletion_token(self, path: Path, token: bytes) -> None: ...
    def read_expiry(self, path: Path) -> datetime | None: ...
    def write_expiry(self, path: Path, expires_at: datetime) -> None: ...
    def clear_expiry(self, path: Path) -> None: ...
