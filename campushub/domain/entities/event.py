"""Domain entity representing a campus event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

EVENT_CATEGORIES = ("Tech", "Music", "Sports", "Art", "Cultural", "Career")


@dataclass
class Event:
    """An event published by a club organizer."""

    id: int | None
    title: str
    description: str
    date: str
    time: str
    venue: str
    club_name: str
    organizer_id: int
    category: str
    tags: list[str] = field(default_factory=list)
    long_description: str | None = None
    image: str | None = None
    club_id: int | None = None
    is_past: bool = False
    registration_count: int | None = 0
    registration_link: str | None = None
    created_at: datetime | None = None


__all__ = ["Event", "EVENT_CATEGORIES"]
