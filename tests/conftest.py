"""Shared fixtures: a SQLite database file, a store client and seeded rows."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

import pytest

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CORS_ORIGINS"] = "http://testserver"
for _name in ("SENDGRID_API_KEY", "OPENAI_API_KEY", "AZURE_STORAGE_CONNECTION_STRING"):
    os.environ.pop(_name, None)

from campushub.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

PASSWORD = "correct-horse-battery"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def database():
    """Recreate every table before each test."""

    from campushub.infrastructure import database

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield database
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
def store():
    from campushub.infrastructure.database import SessionLocal
    from campushub.infrastructure.store import ChangeFeed, StoreClient

    return StoreClient(SessionLocal, ChangeFeed())


@pytest.fixture
def make_user():
    """Create a user through the signup use case and return the entity."""

    from campushub.application.use_cases.users import register_user
    from campushub.domain.entities import ROLES
    from campushub.infrastructure.database import SessionLocal
    from campushub.infrastructure.models import UserModel
    from campushub.infrastructure.repositories import UserRepository

    def _make(
        email: str,
        *,
        role: str = "student",
        full_name: str = "Test User",
        organizer_status: str | None = None,
        email_preferences: dict | None = None,
    ):
        with SessionLocal() as session:
            user = register_user(
                session,
                email=email,
                password=PASSWORD,
                full_name=full_name,
                role=role,
                allowed_roles=ROLES,
            )
            if organizer_status is not None or email_preferences is not None:
                model = session.get(UserModel, user.id)
                if organizer_status is not None:
                    model.organizer_status = organizer_status
                if email_preferences is not None:
                    model.email_preferences = {
                        **(model.email_preferences or {}),
                        **email_preferences,
                    }
                session.commit()
            return UserRepository(session).get(user.id)

    return _make


@pytest.fixture
def make_event():
    """Insert an event row directly, ``days`` from now (negative for past)."""

    from campushub.domain.entities import Event
    from campushub.infrastructure.database import SessionLocal
    from campushub.infrastructure.models import EventModel
    from campushub.utils import now_in_app_naive_datetime

    def _make(organizer_id: int, *, days: int = 7, title: str = "Intro to Rust", **values):
        start = now_in_app_naive_datetime() + timedelta(days=days)
        fields = {
            "title": title,
            "description": "A hands-on workshop for beginners.",
            "date": start.date().isoformat(),
            "time": "18:30",
            "venue": "Main Auditorium",
            "club_name": "Coding Club",
            "organizer_id": organizer_id,
            "category": "Tech",
            "tags": ["rust"],
            "is_past": days < 0,
            "registration_count": 0,
        }
        fields.update(values)
        with SessionLocal() as session:
            model = EventModel(**fields)
            session.add(model)
            session.commit()
            session.refresh(model)
            return Event(
                **{
                    column.key: getattr(model, column.key)
                    for column in EventModel.__table__.columns
                }
            )

    return _make


@pytest.fixture
def client():
    """Return a test client bound to a fresh application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Return bearer headers for ``email``."""

    def _login(email: str, password: str = PASSWORD) -> dict[str, str]:
        response = client.post("/auth/token", data={"username": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
