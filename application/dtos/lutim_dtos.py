from pydantic import BaseModel, Field


class LutimUploadMessage(BaseModel):
    real_short: str
    short: str
    token: str
    thumb: str = ""
    filename: str | None = None
    created_at: int = Field(..., description="Unix timestamp of the upload")
    del_at_view: bool = False
    ext: str
    limit: int = Field(..., description="Effective lifetime in days")


class LutimUploadReply(BaseModel):
    success: bool = True
    msg: LutimUploadMessage


class LutimStatusReply(BaseModel):
    success: bool
    msg: str


class LutimInfoResponse(BaseModel):
    always_encrypt: bool = False
    broadcast_message: str = ""
    contact: str
    default_delay: int
    image_magick: bool = False
    max_delay: int
    max_file_size: int
