"""Background loop purging expired objects from the content store."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure

if TYPE_CHECKING:
    from application.use_cases.sweep_use_cases import SweepExpiredObjectsUseCase

logger = structlog.get_logger()


class ExpirationSweeper:
    """Run the expiration sweep every ``interval_seconds`` until stopped.

    Each pass runs in a worker thread so the directory walk never blocks the
    event loop. ``stop()`` interrupts the wait between passes; a pass already
    in progress is allowed to finish.
    """

    def __init__(
        self,
        sweep_use_case: SweepExpiredObjectsUseCase,
        interval_seconds: float = 3600.0,
    ) -> None:
        self.sweep_use_case = sweep_use_case
        self.interval_seconds = interval_seconds
        self._stop_event = asyncio.Event()
        self.passes = 0

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    async def run_once(self) -> None:
        """Run a single sweep pass off the event loop."""
        try:
            result = await asyncio.to_thread(self.sweep_use_case.execute)
        except Exception:
            logger.exception("expiration_sweep_crashed")
            return
        finally:
            self.passes += 1
        if isinstance(result, Failure):
            logger.warning("expiration_sweep_failed", error=str(result.failure()))

    async def run(self) -> None:
        """Loop until ``stop()`` is called."""
        logger.info("expiration_sweeper_started", interval_seconds=self.interval_seconds)
        try:
            while not self._stop_event.is_set():
                await self.run_once()
                with contextlib.suppress(TimeoutError):
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
        finally:
            logger.info("expiration_sweeper_stopped", passes=self.passes)

    def stop(self) -> None:
        self._stop_event.set()
