from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from domain.value_objects.stored_object import StoredObject
    from domain.value_objects.sweep_report import SweepReport


class ContentStore(Protocol):
    def put(
        self,
        stream: BinaryIO,
        original_filename: str | None,
        lifetime_days: int,
    ) -> StoredObject:
        """Persist a stream under its content-derived identifier.

        The object only becomes visible under its identifier once fully
        written. Raises InfrastructureError (or OSError) on storage failure.
        """
        ...

    def locate(self, identifier: str) -> Path | None:
        """Return the path of a committed object, None if it cannot be served."""
        ...

    def delete(self, identifier: str, presented_token: str) -> None:
        """Remove an object if the token matches.

        Raises ObjectNotFoundError when the object is missing or the token
        does not match; both cases are indistinguishable to callers.
        """
        ...

    def purge_expired(self, now: datetime) -> SweepReport: ...
