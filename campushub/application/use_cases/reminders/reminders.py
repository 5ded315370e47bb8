"""Reminder scheduling helpers."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from functools import partial
from typing import Optional

import anyio

from campushub.application.rows import row_to_entity
from campushub.application.use_cases.notifications import notify_event_reminder
from campushub.domain.entities import Event, Reminder, User
from campushub.infrastructure.email import send_reminder_email
from campushub.infrastructure.store import StoreClient, create_row, update_row
from campushub.utils import (
    combine_event_datetime,
    format_date,
    format_time,
    now_in_app_naive_datetime,
)

logger = logging.getLogger(__name__)

REMINDER_OFFSETS = (
    ("1 hour before", timedelta(hours=1)),
    ("1 day before", timedelta(days=1)),
    ("1 week before", timedelta(weeks=1)),
)


def get_default_reminder_time(event_date: str, event_time: str) -> datetime:
    """Return the moment 24 hours before the event starts."""

    return combine_event_datetime(event_date, event_time) - timedelta(days=1)


def get_reminder_time_options(
    event_date: str, event_time: str, now: Optional[datetime] = None
) -> list[tuple[str, datetime]]:
    """Return the labelled reminder times that are still in the future."""

    start = combine_event_datetime(event_date, event_time)
    reference = now or now_in_app_naive_datetime()
    return [
        (label, start - offset)
        for label, offset in REMINDER_OFFSETS
        if start - offset > reference
    ]


async def create_reminder(
    store: StoreClient, user: User, event: Event, reminder_time: datetime
) -> Optional[Reminder]:
    """Persist a reminder and send a confirmation email.

    Returns ``None`` when the user disabled event reminders.
    """

    if not user.email:
        raise ValueError("User email is required for reminders")
    if not user.wants_email("event_reminders"):
        logger.debug("Reminders disabled for user %s; skipping", user.id)
        return None

    row = await create_row(
        store,
        "reminders",
        {
            "user_id": user.id,
            "event_id": event.id,
            "event_title": event.title,
            "event_date": event.date,
            "reminder_time": reminder_time,
            "sent": False,
        },
    )

    try:
        sent = await anyio.to_thread.run_sync(
            partial(
                send_reminder_email,
                user.email,
                event.title,
                format_date(event.date),
                format_time(event.time),
                reminder_time,
            )
        )
        if not sent:
            logger.warning("Reminder confirmation email was not sent to %s", user.email)
    except Exception:
        logger.exception("Failed to send reminder confirmation email")

    return row_to_entity(Reminder, row)


async def list_reminders(store: StoreClient, user_id: int) -> list[Reminder]:
    rows = await store.select(
        "reminders", filters={"user_id": user_id}, order_by="reminder_time"
    )
    return [row_to_entity(Reminder, row) for row in rows]


async def mark_reminder_as_sent(store: StoreClient, reminder_id: int) -> Reminder:
    row = await update_row(store, "reminders", reminder_id, {"sent": True})
    return row_to_entity(Reminder, row)


async def delete_unsent_reminders(store: StoreClient, user_id: int, event_id: int) -> int:
    """Remove pending reminders of ``user_id`` for ``event_id``."""

    rows = await store.select(
        "reminders", filters={"user_id": user_id, "event_id": event_id, "sent": False}
    )
    for row in rows:
        await store.delete("reminders", row["id"])
    return len(rows)


async def dispatch_due_reminders(
    store: StoreClient, now: Optional[datetime] = None
) -> list[Reminder]:
    """Turn every unsent reminder whose time has come into a notification."""

    reference = now or now_in_app_naive_datetime()
    pending = await store.select(
        "reminders", filters={"sent": False}, order_by="reminder_time"
    )
    dispatched: list[Reminder] = []
    for row in pending:
        reminder = row_to_entity(Reminder, row)
        if reminder.reminder_time > reference:
            break
        await notify_event_reminder(
            store,
            user_id=reminder.user_id,
            event_id=reminder.event_id,
            event_title=reminder.event_title,
            reminder_time=reminder.reminder_time,
        )
        dispatched.append(await mark_reminder_as_sent(store, reminder.id))
    if dispatched:
        logger.info("Dispatched %s due reminders", len(dispatched))
    return dispatched
