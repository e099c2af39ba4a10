from pydantic import BaseModel


class SweepReport(BaseModel):
    """Outcome of one expiration sweep over the storage root."""

    scanned: int = 0
    """Number of files visited during the walk."""

    removed: list[str] = []
    """Names of the entries removed because they had expired."""

    skipped: int = 0
    """Entries whose metadata could not be read or that vanished mid-sweep."""
