"""Standalone expiration sweeper.

Runs the same loop the API process starts in its lifespan, for deployments
that serve the API with several workers and want a single sweeper.
"""

from __future__ import annotations

import argparse
import asyncio
import signal

import structlog
from returns.result import Success

from application.use_cases.sweep_use_cases import SweepExpiredObjectsUseCase
from infrastructure.config import get_settings
from infrastructure.di.container import create_container
from infrastructure.logging import setup_logging
from infrastructure.sweeper.expiration_sweeper import ExpirationSweeper

logger = structlog.get_logger()


async def run_worker(*, once: bool = False) -> None:
    """Run the sweeper until SIGINT/SIGTERM, or a single pass with ``once``."""
    settings = get_settings()
    setup_logging(settings)
    container = create_container(settings)

    if once:
        result = container[SweepExpiredObjectsUseCase].execute()
        if not isinstance(result, Success):
            logger.error("sweep_worker_pass_failed", error=str(result.failure()))
        return

    sweeper = container[ExpirationSweeper]

    def handle_signal(signum: int) -> None:
        logger.info("sweep_worker_signal_received", signum=signum)
        sweeper.stop()

    # Loop-level handlers wake the sweeper out of its wait between passes.
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, handle_signal, signum)

    logger.info("sweep_worker_started", storage_root=str(settings.storage_root))
    try:
        await sweeper.run()
    except Exception:
        logger.exception("sweep_worker_error")
        raise
    finally:
        logger.info("sweep_worker_shutdown_complete")


def main() -> None:
    """Run the expiration sweeper."""
    parser = argparse.ArgumentParser(description="Purge expired objects from the storage root.")
    parser.add_argument("--once", action="store_true", help="run a single sweep pass and exit")
    args = parser.parse_args()
    asyncio.run(run_worker(once=args.once))


if __name__ == "__main__":
    main()
