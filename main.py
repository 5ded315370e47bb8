from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campushub.application.use_cases.events import refresh_past_flags
from campushub.config import get_settings
from campushub.infrastructure.database import SessionLocal, engine, initialize_database
from campushub.infrastructure.notifications import LiveConnectionManager, NotificationPublisher
from campushub.infrastructure.store import ChangeFeed, StoreClient
from campushub.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, flag finished events and start pushing notifications."""

    initialize_database()
    await refresh_past_flags(app.state.store)
    app.state.publisher.attach(app.state.feed)
    yield
    app.state.publisher.detach()
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Campus Hub API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    feed = ChangeFeed()
    manager = LiveConnectionManager()
    app.state.feed = feed
    app.state.store = StoreClient(SessionLocal, feed)
    app.state.manager = manager
    app.state.publisher = NotificationPublisher(manager)
    app.state.registrations_in_flight = set()

    register_routes(app)
    return app


app = create_app()
