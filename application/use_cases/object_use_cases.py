from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.lutim_dtos import LutimInfoResponse
from application.dtos.object_dtos import FetchTarget, UploadObjectRequest, UploadObjectResponse
from domain.exceptions import ObjectNotFoundError, ValidationError
from domain.services.clock import Clock, utc_now
from domain.value_objects.identifier import validate_deletion_token, validate_identifier

if TYPE_CHECKING:
    from application.ports.content_store import ContentStore
    from domain.services.lifetime_policy import LifetimePolicy

logger = structlog.get_logger()

DELETE_REJECTED_MESSAGE = "no such file or invalid token"


class UploadObjectUseCase:
    """Store an uploaded file and hand back its identifier and deletion token.

    Shared by both API dialects; only the reply encoding differs.
    """

    def __init__(
        self,
        content_store: ContentStore,
        lifetime_policy: LifetimePolicy,
        max_file_size: int,
        clock: Clock = utc_now,
    ) -> None:
        self.content_store = content_store
        self.lifetime_policy = lifetime_policy
        self.max_file_size = max_file_size
        self.clock = clock

    def execute(
        self,
        stream: BinaryIO,
        cmd: UploadObjectRequest,
    ) -> Result[UploadObjectResponse, AppError]:
        """Execute the upload.

        Args:
            stream: Binary stream of the uploaded file
            cmd: Upload request with filename, size and raw lifetime

        Returns:
            Result containing the upload response or an error

        """
        if cmd.size_bytes is not None and cmd.size_bytes > self.max_file_size:
            return Failure(
                AppError(
                    "validation",
                    f"File exceeds maximum size of {self.max_file_size} bytes",
                ),
            )

        lifetime_days = self.lifetime_policy.resolve(cmd.delete_day)
        try:
            stored = self.content_store.put(stream, cmd.filename, lifetime_days)
        except ValidationError as e:
            return Failure(AppError("validation", f"Validation error: {e!s}"))
        except Exception as e:
            logger.exception("object_store_failed", filename=cmd.filename)
            return Failure(AppError("storage_error", f"Failed to store object: {e!s}"))

        return Success(
            UploadObjectResponse(
                identifier=stored.identifier,
                deletion_token=stored.deletion_token,
                filename=cmd.filename,
                extension=stored.extension,
                lifetime_days=stored.lifetime_days,
                expires_at=stored.expires_at,
                created_at=self.clock(),
            ),
        )


class FetchObjectUseCase:
    """Resolve an identifier into something the HTTP layer can serve."""

    def __init__(self, content_store: ContentStore, accel_prefix: str = "") -> None:
        self.content_store = content_store
        self.accel_prefix = accel_prefix.rstrip("/")

    def execute(self, candidate: str) -> Result[FetchTarget, AppError]:
        identifier = validate_identifier(candidate)
        if identifier is None:
            return Failure(AppError("not_found", "Not Found"))

        # The front-end proxy resolves the file itself; no filesystem access here.
        if self.accel_prefix:
            return Success(
                FetchTarget(
                    identifier=identifier,
                    accel_redirect=f"{self.accel_prefix}/{identifier}",
                ),
            )

        path = self.content_store.locate(identifier)
        if path is None:
            return Failure(AppError("not_found", "Not Found"))
        return Success(FetchTarget(identifier=identifier, path=path))


class DeleteObjectUseCase:
    """Delete an object after checking the presented deletion token."""

    def __init__(self, content_store: ContentStore) -> None:
        self.content_store = content_store

    def execute(self, candidate: str, presented_token: str | None) -> Result[str, AppError]:
        identifier = validate_identifier(candidate)
        if identifier is None:
            return Failure(AppError("not_found", DELETE_REJECTED_MESSAGE))

        token = validate_deletion_token(presented_token)
        if token is None:
            logger.info("object_delete_rejected", identifier=identifier, reason="malformed_token")
            return Failure(AppError("not_found", DELETE_REJECTED_MESSAGE))

        try:
            self.content_store.delete(identifier, token)
        except ObjectNotFoundError:
            return Failure(AppError("not_found", DELETE_REJECTED_MESSAGE))
        except Exception as e:
            logger.exception("object_delete_failed", identifier=identifier)
            return Failure(AppError("storage_error", f"Failed to delete object: {e!s}"))

        return Success(identifier)


class GetServerInfoUseCase:
    """Describe server capabilities in the Lutim ``/infos`` format."""

    def __init__(
        self,
        lifetime_policy: LifetimePolicy,
        max_file_size: int,
        contact: str,
        broadcast_message: str = "",
    ) -> None:
        self.lifetime_policy = lifetime_policy
        self.max_file_size = max_file_size
        self.contact = contact
        self.broadcast_message = broadcast_message

    def execute(self) -> LutimInfoResponse:
        return LutimInfoResponse(
            broadcast_message=self.broadcast_message,
            contact=self.contact,
            default_delay=self.lifetime_policy.default_days,
            max_delay=self.lifetime_policy.max_days,
            max_file_size=self.max_file_size,
        )
