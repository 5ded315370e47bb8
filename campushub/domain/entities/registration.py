"""Domain entity linking a user to an event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Registration:
    """A student's registration with profile and event snapshots."""

    id: int | None
    event_id: int
    user_id: int
    full_name: str
    email: str
    roll_number: str
    branch: str
    section: str
    title: str | None = None
    date: str | None = None
    time: str | None = None
    venue: str | None = None
    club_name: str | None = None
    registered_at: datetime | None = None


__all__ = ["Registration"]
