"""Use cases for creating, editing, listing and deleting events."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from campushub.application.rows import row_to_entity
from campushub.domain.entities import Event, User
from campushub.infrastructure.store import (
    StoreClient,
    create_row,
    delete_row,
    update_row,
)
from campushub.utils import is_event_past

from .validators import (
    ensure_category,
    ensure_club_name,
    ensure_date,
    ensure_description,
    ensure_time,
    ensure_title,
    ensure_venue,
    normalize_tags,
)

logger = logging.getLogger(__name__)

_FIELD_VALIDATORS = {
    "title": ensure_title,
    "description": ensure_description,
    "date": ensure_date,
    "time": ensure_time,
    "venue": ensure_venue,
    "club_name": ensure_club_name,
    "category": ensure_category,
    "tags": normalize_tags,
}
_OPTIONAL_FIELDS = ("long_description", "image", "club_id", "registration_link")


class EventPermissionError(PermissionError):
    """Raised when a user may not modify an event."""


def _clean(values: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, validator in _FIELD_VALIDATORS.items():
        if key in values:
            cleaned[key] = validator(values[key])
        elif not partial and key != "tags":
            cleaned[key] = validator(None)
    for key in _OPTIONAL_FIELDS:
        if key in values:
            value = values[key]
            if isinstance(value, str):
                value = value.strip() or None
            cleaned[key] = value
    return cleaned


def ensure_can_edit(user: User, event: Event) -> None:
    """Admins may edit any event; organizers only their own."""

    if user.is_admin():
        return
    if not user.can_manage_events() or event.organizer_id != user.id:
        raise EventPermissionError("You can only manage your own events.")


async def get_event(store: StoreClient, event_id: int) -> Event:
    return row_to_entity(Event, await store.select_one("events", event_id))


async def list_events(
    store: StoreClient,
    *,
    past: Optional[bool] = None,
    organizer_id: Optional[int] = None,
    category: Optional[str] = None,
) -> list[Event]:
    """List events; past events are newest first, others soonest first."""

    filters = {"is_past": past, "organizer_id": organizer_id, "category": category}
    rows = await store.select(
        "events",
        filters={key: value for key, value in filters.items() if value is not None},
        order_by=("date", "desc" if past else "asc"),
    )
    return [row_to_entity(Event, row) for row in rows]


async def create_event(
    store: StoreClient, organizer: User, values: Mapping[str, Any]
) -> Event:
    if not organizer.can_manage_events():
        raise EventPermissionError("Only approved organizers can create events.")
    cleaned = _clean(values, partial=False)
    cleaned.setdefault("tags", [])
    cleaned["organizer_id"] = organizer.id
    cleaned["registration_count"] = 0
    cleaned["is_past"] = is_event_past(cleaned["date"], cleaned["time"])
    row = await create_row(store, "events", cleaned)
    logger.info("Event %s created by user %s", row["id"], organizer.id)
    return row_to_entity(Event, row)


async def update_event(
    store: StoreClient, user: User, event_id: int, values: Mapping[str, Any]
) -> Event:
    event = await get_event(store, event_id)
    ensure_can_edit(user, event)
    cleaned = _clean(values, partial=True)
    if not cleaned:
        return event
    cleaned["is_past"] = is_event_past(
        cleaned.get("date", event.date), cleaned.get("time", event.time)
    )
    row = await update_row(store, "events", event_id, cleaned)
    return row_to_entity(Event, row)


async def delete_event(store: StoreClient, user: User, event_id: int) -> None:
    event = await get_event(store, event_id)
    ensure_can_edit(user, event)
    await delete_row(store, "events", event_id)
    logger.info("Event %s deleted by user %s", event_id, user.id)


async def refresh_past_flags(store: StoreClient) -> int:
    """Flip ``is_past`` on events whose start time has passed."""

    updated = 0
    for row in await store.select("events", filters={"is_past": False}):
        if is_event_past(row["date"], row["time"]):
            await store.update("events", row["id"], {"is_past": True})
            updated += 1
    if updated:
        logger.info("Marked %s events as past", updated)
    return updated
