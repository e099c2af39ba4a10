"""Main FastAPI application."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from infrastructure.config import Settings, get_settings
from infrastructure.logging import setup_logging
from infrastructure.sweeper.expiration_sweeper import ExpirationSweeper
from interfaces.api.routes import object_router
from interfaces.dependencies import get_container

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown.

    Starts the expiration sweeper next to the request handlers and stops it
    on shutdown.
    """
    # Honour container overrides so tests and embedders share one wiring.
    container = app.dependency_overrides.get(get_container, get_container)()
    settings = container[Settings]
    setup_logging(settings)
    logger.info("app_starting", env=settings.app_env, storage_root=str(settings.storage_root))

    sweeper: ExpirationSweeper | None = None
    sweeper_task: asyncio.Task[None] | None = None
    if settings.sweeper_enabled:
        sweeper = container[ExpirationSweeper]
        sweeper_task = asyncio.create_task(sweeper.run())

    logger.info("app_ready")

    yield

    # Cleanup
    logger.info("app_shutting_down")
    if sweeper is not None and sweeper_task is not None:
        sweeper.stop()
        await sweeper_task
    logger.info("app_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Content-addressed image hosting with a Lutim-compatible API",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/health", include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    # Include routers after fixed paths, the object routes capture any single segment
    app.include_router(object_router)

    return app


# Create app instance
app = create_app()


def main() -> None:
    """Serve the API with uvicorn."""
    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
