"""Domain entity representing a student club."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Club:
    """A club requested by an organizer and approved by an admin."""

    id: int | None
    name: str
    description: str
    organizer_id: int
    status: str = "pending"
    logo: str | None = None
    created_at: datetime | None = None


__all__ = ["Club"]
