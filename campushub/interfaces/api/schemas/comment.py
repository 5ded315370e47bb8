"""Comment schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    user_id: int
    author_name: str
    author_avatar: str | None = None
    text: str
    parent_id: int | None = None
    likes: int = 0
    created_at: datetime | None = None
    replies: list[CommentRead] = Field(default_factory=list)


__all__ = ["CommentCreate", "CommentRead"]
