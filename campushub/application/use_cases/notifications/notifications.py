"""Use cases for persisting and reading in-app notifications."""

from __future__ import annotations

import logging
from typing import Optional

from campushub.application.rows import row_to_entity
from campushub.domain.entities import NOTIFICATION_TYPES, Notification
from campushub.infrastructure.store import StoreClient, create_row, update_row

logger = logging.getLogger(__name__)


def event_action_url(event_id: int) -> str:
    return f"/dashboard/events/{event_id}"


async def create_notification(
    store: StoreClient,
    *,
    user_id: int,
    type: str,
    title: str,
    message: str,
    event_id: Optional[int] = None,
    event_title: Optional[str] = None,
    action_url: Optional[str] = None,
) -> Notification:
    """Persist an unread notification for ``user_id``."""

    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Invalid notification type '{type}'")
    row = await create_row(
        store,
        "notifications",
        {
            "user_id": user_id,
            "type": type,
            "title": title,
            "message": message,
            "event_id": event_id,
            "event_title": event_title,
            "action_url": action_url,
            "read": False,
        },
    )
    return row_to_entity(Notification, row)


async def list_notifications(
    store: StoreClient, user_id: int, *, unread_only: bool = False
) -> list[Notification]:
    filters: dict[str, object] = {"user_id": user_id}
    if unread_only:
        filters["read"] = False
    rows = await store.select("notifications", filters=filters, order_by="-created_at")
    return [row_to_entity(Notification, row) for row in rows]


async def mark_notification_as_read(
    store: StoreClient, notification_id: int, *, user_id: Optional[int] = None
) -> Notification:
    if user_id is not None:
        current = await store.select_one("notifications", notification_id)
        if current["user_id"] != user_id:
            raise PermissionError("Notification belongs to another user")
    row = await update_row(store, "notifications", notification_id, {"read": True})
    return row_to_entity(Notification, row)


async def mark_all_notifications_as_read(store: StoreClient, user_id: int) -> int:
    """Mark every unread notification of ``user_id`` as read."""

    unread = await store.select(
        "notifications", filters={"user_id": user_id, "read": False}
    )
    for row in unread:
        await update_row(store, "notifications", row["id"], {"read": True})
    logger.debug("Marked %s notifications as read for user %s", len(unread), user_id)
    return len(unread)
