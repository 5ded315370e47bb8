"""Pydantic models describing notification payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: str
    title: str
    message: str
    event_id: int | None = None
    event_title: str | None = None
    read: bool
    action_url: str | None = None
    created_at: datetime | None = None


class MarkAllReadResponse(BaseModel):
    updated: int


__all__ = ["MarkAllReadResponse", "NotificationRead"]
