from fastapi import FastAPI

from .bookings import router as bookings_router
from .health import router as health_router
from .notifications import router as notifications_router
from .push_tokens import router as push_tokens_router
from .triggers import router as triggers_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(bookings_router)
    app.include_router(notifications_router)
    app.include_router(push_tokens_router)
    app.include_router(triggers_router)
