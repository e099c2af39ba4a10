"""Request dispatcher for uploads, fetches, deletions and server info.

Both API dialects share the same use cases; only the reply encoding
differs (see ``interfaces.api.encoders``).
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Header, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse
from returns.result import Failure
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.formparsers import MultiPartException

from application.dtos.errors import AppError
from application.dtos.lutim_dtos import LutimInfoResponse
from application.dtos.object_dtos import UploadObjectRequest
from application.use_cases.object_use_cases import (
    DeleteObjectUseCase,
    FetchObjectUseCase,
    GetServerInfoUseCase,
    UploadObjectUseCase,
)
from domain.value_objects.identifier import validate_deletion_token, validate_identifier
from infrastructure.config import Settings
from interfaces.api.dialect import LUTIM_FORMAT_FIELD, LUTIM_LIFETIME_FIELD, wants_lutim_reply
from interfaces.api.encoders import (
    fetch_reply,
    lutim_delete_reply,
    lutim_failure_reply,
    lutim_upload_reply,
    rest_upload_reply,
    usage_text,
)
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import ContainerDep

logger = structlog.get_logger()

router = APIRouter(tags=["objects"])

MISSING_FILE_MESSAGE = "Missing file part"


def _form_text(value: object) -> str | None:
    return value if isinstance(value, str) else None


@router.get("/", response_class=PlainTextResponse)
async def usage(
    container: ContainerDep,
) -> str:
    """Describe how to use the service."""
    return usage_text(container[Settings].contact_url)


@router.get("/infos", status_code=status.HTTP_200_OK)
async def server_info(
    container: ContainerDep,
) -> LutimInfoResponse:
    """Advertise server capabilities to Lutim clients."""
    return container[GetServerInfoUseCase].execute()


@router.get("/d/{identifier}/{token}")
@handle_use_case_errors
async def lutim_delete_object(
    identifier: str,
    token: str,
    container: ContainerDep,
) -> Response:
    """Delete an object through a Lutim deletion link."""
    if validate_identifier(identifier) is None or validate_deletion_token(token) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    use_case = container[DeleteObjectUseCase]
    result = await run_in_threadpool(use_case.execute, identifier, token)
    return lutim_delete_reply(result)


@router.get("/{identifier}")
@handle_use_case_errors
async def fetch_object(
    identifier: str,
    container: ContainerDep,
) -> Response:
    """Serve an object, or hand it over to the front-end proxy."""
    use_case = container[FetchObjectUseCase]
    result = await run_in_threadpool(use_case.execute, identifier)
    return await run_in_threadpool(result.map, fetch_reply)


@router.post("/")
@handle_use_case_errors
async def upload_object(
    request: Request,
    container: ContainerDep,
) -> Response:
    """Upload a file from a multipart form.

    Returns:
        302 Found: REST dialect, redirect to the object with its deletion token
        200 OK: Lutim dialect, JSON envelope with the deletion token
        400 Bad Request: Malformed form, missing file part or file too large
        500 Internal Server Error: Storage failure

    """
    try:
        form = await request.form()
    except MultiPartException as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Malformed multipart body: {exc.message}",
        ) from exc

    try:
        delete_day = _form_text(form.get(LUTIM_LIFETIME_FIELD))
        lutim = wants_lutim_reply(_form_text(form.get(LUTIM_FORMAT_FIELD)), delete_day)

        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            if lutim:
                return lutim_failure_reply(AppError("validation", MISSING_FILE_MESSAGE))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=MISSING_FILE_MESSAGE,
            )

        use_case = container[UploadObjectUseCase]
        result = await run_in_threadpool(
            use_case.execute,
            upload.file,
            UploadObjectRequest(
                filename=upload.filename,
                size_bytes=upload.size,
                delete_day=delete_day or None,
            ),
        )
    finally:
        await form.close()

    logger.info(
        "upload_handled",
        dialect="lutim" if lutim else "rest",
        success=not isinstance(result, Failure),
    )
    if lutim:
        if isinstance(result, Failure):
            return lutim_failure_reply(result.failure())
        return result.map(lutim_upload_reply)
    return result.map(rest_upload_reply)


@router.delete("/{identifier}")
@handle_use_case_errors
async def delete_object(
    identifier: str,
    container: ContainerDep,
    x_deletion_token: Annotated[str | None, Header()] = None,
) -> Response:
    """Delete an object with the token from the X-Deletion-Token header."""
    use_case = container[DeleteObjectUseCase]
    result = await run_in_threadpool(use_case.execute, identifier, x_deletion_token)

    if isinstance(result, Failure) and result.failure().category == "not_found":
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return result.map(lambda _: Response(status_code=status.HTTP_204_NO_CONTENT))


@router.delete("/", include_in_schema=False)
async def delete_without_identifier() -> Response:
    """Answer a deletion that names no object like one naming an unknown object."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)
