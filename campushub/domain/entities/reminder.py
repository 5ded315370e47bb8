"""Domain entity for a scheduled event reminder."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Reminder:
    """Reminder for one user about one event."""

    id: int | None
    user_id: int
    event_id: int
    event_title: str
    event_date: str
    reminder_time: datetime
    sent: bool = False
    created_at: datetime | None = None


__all__ = ["Reminder"]
