from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from domain.services.clock import Clock, utc_now

if TYPE_CHECKING:
    from application.ports.content_store import ContentStore
    from domain.value_objects.sweep_report import SweepReport

logger = structlog.get_logger()


class SweepExpiredObjectsUseCase:
    """Run one expiration pass over the content store.

    The sweeper is a trusted internal actor: expired objects are removed
    without any deletion token.
    """

    def __init__(self, content_store: ContentStore, clock: Clock = utc_now) -> None:
        self.content_store = content_store
        self.clock = clock

    def execute(self) -> Result[SweepReport, AppError]:
        now = self.clock()
        try:
            report = self.content_store.purge_expired(now)
        except Exception as e:
            logger.exception("sweep_failed")
            return Failure(AppError("storage_error", f"Sweep failed: {e!s}"))

        logger.info(
            "sweep_completed",
            scanned=report.scanned,
            removed=len(report.removed),
            skipped=report.skipped,
        )
        return Success(report)
