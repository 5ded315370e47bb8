"""Reminder schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReminderCreate(BaseModel):
    reminder_time: datetime | None = None


class ReminderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    event_id: int
    event_title: str
    event_date: str
    reminder_time: datetime
    sent: bool
    created_at: datetime | None = None


class ReminderOption(BaseModel):
    label: str
    value: datetime


__all__ = ["ReminderCreate", "ReminderOption", "ReminderRead"]
