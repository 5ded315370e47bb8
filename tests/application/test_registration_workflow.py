"""Tests for the registration workflow and its best-effort steps."""

from __future__ import annotations

import anyio
import pytest

from campushub.application.use_cases.registrations import (
    REGISTERED,
    UNREGISTERED,
    AlreadyRegisteredError,
    RegistrationForm,
    RegistrationInProgressError,
    RegistrationWorkflow,
    find_registration,
)
from campushub.application.use_cases.registrations import workflow as workflow_module
from campushub.infrastructure.database import SessionLocal
from campushub.infrastructure.store import ChangeFeed, StoreClient

pytestmark = pytest.mark.anyio

FORM = RegistrationForm(full_name="Test User", roll_number="21CS001", branch="CSE", section="A")


class GatedStore(StoreClient):
    """Store that holds registration inserts until ``gate`` is set."""

    def __init__(self) -> None:
        super().__init__(SessionLocal, ChangeFeed())
        self.gate = anyio.Event()
        self.entered = anyio.Event()

    async def insert(self, table, values):
        if table == "registrations":
            self.entered.set()
            await self.gate.wait()
        return await super().insert(table, values)


async def test_register_writes_row_and_side_effects(store, make_user, make_event, monkeypatch):
    sent = []
    monkeypatch.setattr(
        workflow_module,
        "send_registration_confirmation_email",
        lambda *args: sent.append(args) or True,
    )
    user = make_user("student@campus.edu")
    event = make_event(user.id)

    workflow = await RegistrationWorkflow.load(store, user, event)
    result = await workflow.register(FORM)

    assert result.state == REGISTERED
    assert result.complete
    assert result.registration.roll_number == "21CS001"
    assert result.registration.title == event.title
    assert (await store.select_one("events", event.id))["registration_count"] == 1
    assert sent[0][0] == "student@campus.edu"
    assert await store.count("reminders", filters={"user_id": user.id}) == 1
    notifications = await store.select("notifications", filters={"user_id": user.id})
    assert [row["type"] for row in notifications] == ["registration"]


async def test_failed_email_is_reported_not_raised(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu")
    event = make_event(user.id)

    result = await (await RegistrationWorkflow.load(store, user, event)).register(FORM)

    assert result.state == REGISTERED
    assert result.failed_steps == ["confirmation_email"]
    assert await find_registration(store, user.id, event.id) is not None


async def test_reminder_preferences_skip_email_and_reminder(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu", email_preferences={"event_reminders": False})
    event = make_event(user.id)

    result = await (await RegistrationWorkflow.load(store, user, event)).register(FORM)

    assert result.complete
    assert await store.count("reminders") == 0


async def test_second_register_is_rejected(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu")
    event = make_event(user.id)
    await (await RegistrationWorkflow.load(store, user, event)).register(FORM)

    with pytest.raises(AlreadyRegisteredError):
        await (await RegistrationWorkflow.load(store, user, event)).register(FORM)

    stale = RegistrationWorkflow(store, user, event)
    with pytest.raises(AlreadyRegisteredError):
        await stale.register(FORM)
    assert stale.state == UNREGISTERED
    assert await store.count("registrations") == 1


async def test_concurrent_register_is_rejected(make_user, make_event) -> None:
    store = GatedStore()
    user = make_user("student@campus.edu")
    event = make_event(user.id)
    workflow = await RegistrationWorkflow.load(store, user, event)
    results = {}

    async def first() -> None:
        results["first"] = await workflow.register(FORM)

    async with anyio.create_task_group() as tg:
        tg.start_soon(first)
        await store.entered.wait()
        with pytest.raises(RegistrationInProgressError):
            await workflow.register(FORM)
        store.gate.set()

    assert results["first"].state == REGISTERED
    assert await store.count("registrations", filters={"event_id": event.id}) == 1


async def test_only_students_can_register(store, make_user, make_event) -> None:
    admin = make_user("admin@campus.edu", role="admin")
    organizer = make_user("org@campus.edu", role="club_organizer", organizer_status="approved")
    event = make_event(organizer.id)

    for user in (admin, organizer):
        workflow = await RegistrationWorkflow.load(store, user, event)
        with pytest.raises(PermissionError, match="Only students can register for events."):
            await workflow.register(FORM)
        assert workflow.state == UNREGISTERED

    assert await store.count("registrations", filters={"event_id": event.id}) == 0


async def test_invalid_form_and_past_event(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu")
    upcoming = make_event(user.id)
    past = make_event(user.id, days=-3)

    workflow = await RegistrationWorkflow.load(store, user, upcoming)
    with pytest.raises(ValueError, match="Roll number is required"):
        await workflow.register(RegistrationForm("Test User", " ", "CSE", "A"))
    assert workflow.state == UNREGISTERED

    with pytest.raises(ValueError, match="Registration is closed"):
        await (await RegistrationWorkflow.load(store, user, past)).register(FORM)
    assert await store.count("registrations") == 0


async def test_unregister_cleans_up(store, make_user, make_event) -> None:
    user = make_user("student@campus.edu")
    event = make_event(user.id)
    workflow = await RegistrationWorkflow.load(store, user, event)
    await workflow.register(FORM)

    result = await workflow.unregister()

    assert result.state == UNREGISTERED
    assert result.complete
    assert await find_registration(store, user.id, event.id) is None
    assert (await store.select_one("events", event.id))["registration_count"] == 0
    assert await store.count("reminders", filters={"user_id": user.id, "sent": False}) == 0

    with pytest.raises(ValueError, match="not registered"):
        await workflow.unregister()
