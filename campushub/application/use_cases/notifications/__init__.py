"""Public helpers for emitting and reading notifications."""

from .events import (
    COMMENT_PREVIEW_LENGTH,
    get_notification_preferences,
    notify_event_comment,
    notify_event_reminder,
    notify_registration_success,
    send_comment_email_notification,
)
from .notifications import (
    create_notification,
    event_action_url,
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)

__all__ = [
    "COMMENT_PREVIEW_LENGTH",
    "create_notification",
    "event_action_url",
    "get_notification_preferences",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "notify_event_comment",
    "notify_event_reminder",
    "notify_registration_success",
    "send_comment_email_notification",
]
