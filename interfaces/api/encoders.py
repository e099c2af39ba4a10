"""Reply encoders for the REST and Lutim dialects."""

from __future__ import annotations

import functools
import mimetypes
import os
from email.utils import format_datetime, formatdate
from typing import TYPE_CHECKING

from fastapi import HTTPException, Response, status
from fastapi.responses import JSONResponse, RedirectResponse, StreamingResponse
from returns.result import Failure, Result
from starlette.background import BackgroundTask

from application.dtos.lutim_dtos import LutimStatusReply, LutimUploadMessage, LutimUploadReply

if TYPE_CHECKING:
    from application.dtos.errors import AppError
    from application.dtos.object_dtos import FetchTarget, UploadObjectResponse

DELETION_TOKEN_HEADER = "X-Deletion-Token"
ACCEL_REDIRECT_HEADER = "X-Accel-Redirect"

LUTIM_DELETED_MESSAGE = "file deleted"
LUTIM_INTERNAL_ERROR_MESSAGE = "internal error"

STREAM_CHUNK_SIZE = 64 * 1024


def rest_upload_reply(response: UploadObjectResponse) -> Response:
    """Redirect to the new object, exposing the deletion token as a header."""
    headers = {DELETION_TOKEN_HEADER: response.deletion_token}
    if response.expires_at is not None:
        headers["Expires"] = format_datetime(response.expires_at, usegmt=True)
    return RedirectResponse(
        url=f"/{response.identifier}",
        status_code=status.HTTP_302_FOUND,
        headers=headers,
    )


def lutim_upload_reply(response: UploadObjectResponse) -> Response:
    reply = LutimUploadReply(
        success=True,
        msg=LutimUploadMessage(
            real_short=response.identifier,
            short=response.identifier,
            token=response.deletion_token,
            filename=response.filename,
            created_at=int(response.created_at.timestamp()),
            ext=response.extension,
            limit=response.lifetime_days,
        ),
    )
    return JSONResponse(reply.model_dump())


def lutim_failure_reply(error: AppError) -> Response:
    """Encode a failed Lutim request as ``{"success": false, "msg": ...}``.

    Client errors answer 400 with the error message; storage errors answer
    500 without details.
    """
    if error.category == "storage_error":
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        message = LUTIM_INTERNAL_ERROR_MESSAGE
    else:
        status_code = status.HTTP_400_BAD_REQUEST
        message = error.message
    reply = LutimStatusReply(success=False, msg=message)
    return JSONResponse(reply.model_dump(), status_code=status_code)


def lutim_delete_reply(result: Result[str, AppError]) -> Response:
    """Encode a deletion outcome as a Lutim envelope.

    The outcome is carried by ``success``; the status code mirrors it.
    """
    if isinstance(result, Failure):
        return lutim_failure_reply(result.failure())
    return JSONResponse(LutimStatusReply(success=True, msg=LUTIM_DELETED_MESSAGE).model_dump())


def fetch_reply(target: FetchTarget) -> Response:
    """Serve the object, or hand it over to the front-end proxy.

    The file is opened before the response starts, so an object deleted
    after ``locate`` answers 404 instead of failing mid-response.
    """
    if target.accel_redirect is not None:
        return Response(
            status_code=status.HTTP_204_NO_CONTENT,
            headers={ACCEL_REDIRECT_HEADER: target.accel_redirect},
        )

    try:
        handle = target.path.open("rb")
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found") from e

    stat_result = os.fstat(handle.fileno())
    media_type = mimetypes.guess_type(target.path.name)[0] or "application/octet-stream"
    return StreamingResponse(
        iter(functools.partial(handle.read, STREAM_CHUNK_SIZE), b""),
        media_type=media_type,
        headers={
            "Content-Length": str(stat_result.st_size),
            "Last-Modified": formatdate(stat_result.st_mtime, usegmt=True),
        },
        background=BackgroundTask(handle.close),
    )


def usage_text(contact_url: str) -> str:
    return f"""
snapshelf - dead simple image hosting

Upload:
  $ curl -v -F file=@image.png [ -F delete-day=<lifetime in days> ] /
    Returns a 302 redirect to the image, with {DELETION_TOKEN_HEADER} header for deletion.

  or (Lutim compatibility):
  $ curl -v -F file=@image.png -F format=json [ -F delete-day=<lifetime in days> ] /
    Returns a JSON reply which includes the deletion token.

Delete existing image:
  $ curl -v -X DELETE -H '{DELETION_TOKEN_HEADER}: <token>' /<image path>

  or (Lutim compatibility):
  $ curl -v /d/<image path>/<token>

Server capabilities (Lutim compatibility):
  $ curl -v /infos

Source: {contact_url}
"""
