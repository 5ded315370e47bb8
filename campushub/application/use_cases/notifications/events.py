"""Helpers that turn domain activity into notifications and emails."""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from typing import Optional

import anyio

from campushub.domain.entities import Notification, User
from campushub.infrastructure.email import send_comment_notification_email
from campushub.infrastructure.store import StoreClient
from campushub.utils import truncate_text

from .notifications import create_notification, event_action_url

logger = logging.getLogger(__name__)

COMMENT_PREVIEW_LENGTH = 100


async def notify_event_comment(
    store: StoreClient,
    *,
    event_id: int,
    event_title: str,
    commenter_name: str,
    comment_text: str,
) -> Optional[Notification]:
    """Notify the organizer of ``event_id`` about a new comment."""

    event = await store.select_one("events", event_id)
    organizer_id = event.get("organizer_id")
    if not organizer_id:
        return None
    preview = truncate_text(comment_text, COMMENT_PREVIEW_LENGTH)
    return await create_notification(
        store,
        user_id=organizer_id,
        type="comment",
        title="New Comment on Your Event",
        message=f'{commenter_name} commented on "{event_title}": "{preview}"',
        event_id=event_id,
        event_title=event_title,
        action_url=event_action_url(event_id),
    )


async def notify_event_reminder(
    store: StoreClient,
    *,
    user_id: int,
    event_id: int,
    event_title: str,
    reminder_time: datetime,
) -> Notification:
    return await create_notification(
        store,
        user_id=user_id,
        type="reminder",
        title="Event Reminder",
        message=(
            f'Reminder: "{event_title}" is happening soon '
            f"({reminder_time.strftime('%Y-%m-%d %H:%M')})"
        ),
        event_id=event_id,
        event_title=event_title,
        action_url=event_action_url(event_id),
    )


async def notify_registration_success(
    store: StoreClient, *, user_id: int, event_id: int, event_title: str
) -> Notification:
    return await create_notification(
        store,
        user_id=user_id,
        type="registration",
        title="Registration Confirmed",
        message=f'You have successfully registered for "{event_title}"',
        event_id=event_id,
        event_title=event_title,
        action_url=event_action_url(event_id),
    )


async def send_comment_email_notification(
    organizer: User, commenter_name: str, comment_text: str, event_title: str
) -> bool:
    """Email ``organizer`` about a comment unless they opted out."""

    if not organizer.email or not organizer.wants_email("comment_replies"):
        return False
    try:
        return await anyio.to_thread.run_sync(
            partial(
                send_comment_notification_email,
                organizer.email,
                event_title,
                commenter_name,
                comment_text,
            )
        )
    except Exception:
        logger.exception("Failed to send comment notification email")
        return False


def get_notification_preferences(user: User) -> dict[str, bool]:
    return {
        "email_reminders": user.wants_email("event_reminders"),
        "email_comments": user.wants_email("comment_replies"),
        "email_registrations": user.wants_email("registration_confirmations"),
        "in_app_notifications": True,
    }
