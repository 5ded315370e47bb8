"""Domain entity for threaded feedback on past events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Comment:
    """A comment, or a reply when ``parent_id`` is set."""

    id: int | None
    event_id: int
    user_id: int
    author_name: str
    text: str
    parent_id: int | None = None
    author_avatar: str | None = None
    likes: int = 0
    created_at: datetime | None = None
    replies: list["Comment"] = field(default_factory=list)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


__all__ = ["Comment"]
