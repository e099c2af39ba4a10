"""API route registrations."""

from interfaces.api.routes.object_routes import router as object_router

__all__ = ["object_router"]
