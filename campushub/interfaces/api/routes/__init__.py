from fastapi import FastAPI

from .auth import router as auth_router
from .clubs import router as clubs_router
from .comments import router as comments_router
from .email import router as email_router
from .events import router as events_router
from .live import router as live_router
from .notifications import router as notifications_router
from .registrations import router as registrations_router
from .reminders import router as reminders_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(clubs_router)
    app.include_router(events_router)
    app.include_router(registrations_router)
    app.include_router(comments_router)
    app.include_router(reminders_router)
    app.include_router(notifications_router)
    app.include_router(email_router)
    app.include_router(live_router)
