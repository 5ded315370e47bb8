"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPES = ("reminder", "comment", "registration", "event_update", "system")


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    type: str
    title: str
    message: str
    event_id: int | None = None
    event_title: str | None = None
    read: bool = False
    action_url: str | None = None
    created_at: datetime | None = None


__all__ = ["Notification", "NOTIFICATION_TYPES"]
