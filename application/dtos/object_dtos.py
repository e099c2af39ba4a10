from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field


class UploadObjectRequest(BaseModel):
    filename: str | None = Field(None, description="Original filename of the upload")
    size_bytes: int | None = Field(None, description="Size of the upload when known")
    delete_day: str | None = Field(None, description="Raw lifetime in days from the form")


class UploadObjectResponse(BaseModel):
    identifier: str = Field(..., description="Content-derived identifier of the object")
    deletion_token: str = Field(..., description="Secret required to delete the object")
    filename: str | None = Field(None, description="Original filename of the upload")
    extension: str = Field(..., description="Identifier extension, including the dot")
    lifetime_days: int = Field(0, description="Effective lifetime in days, 0 for infinite")
    expires_at: datetime | None = Field(None, description="Expiration instant, if any")
    created_at: datetime = Field(..., description="When the upload was committed")


class FetchTarget(BaseModel):
    """Where the bytes of a fetched object come from.

    Exactly one of ``path`` (served by this process) or ``accel_redirect``
    (served by the front-end proxy) is set.
    """

    identifier: str
    path: Path | None = None
    accel_redirect: str | None = None
