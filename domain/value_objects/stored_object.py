from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StoredObject(BaseModel):
    """Value object describing an object committed to the content store."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="Content-derived public identifier")
    deletion_token: str = Field(..., description="Hex-encoded secret required for deletion")
    expires_at: datetime | None = Field(None, description="Expiration instant, None for never")
    lifetime_days: int = Field(0, ge=0, description="Effective lifetime in days, 0 for infinite")

    @property
    def extension(self) -> str:
        """Return the identifier extension including the leading dot."""
        return "." + self.identifier.rsplit(".", 1)[1]
