"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class EmailPreferences(BaseModel):
    event_reminders: bool = True
    comment_replies: bool = True
    registration_confirmations: bool = True


class EmailPreferencesUpdate(BaseModel):
    event_reminders: bool | None = None
    comment_replies: bool | None = None
    registration_confirmations: bool | None = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    first_name: str
    last_name: str
    full_name: str
    role: str
    avatar: str | None = None
    club_ids: list[int] = Field(default_factory=list)
    roll_number: str | None = None
    branch: str | None = None
    section: str | None = None
    organizer_status: str | None = None
    email_preferences: EmailPreferences = Field(default_factory=EmailPreferences)
    created_at: datetime | None = None


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, min_length=1, max_length=80)
    last_name: str | None = Field(default=None, max_length=80)
    avatar: str | None = Field(default=None, max_length=500)
    roll_number: str | None = Field(default=None, max_length=50)
    branch: str | None = Field(default=None, max_length=50)
    section: str | None = Field(default=None, max_length=20)
    email_preferences: EmailPreferencesUpdate | None = None


class RoleUpdate(BaseModel):
    role: str


class ApprovalStatusUpdate(BaseModel):
    status: str


class NotificationPreferencesRead(BaseModel):
    email_reminders: bool
    email_comments: bool
    email_registrations: bool
    in_app_notifications: bool


__all__ = [
    "ApprovalStatusUpdate",
    "EmailPreferences",
    "EmailPreferencesUpdate",
    "NotificationPreferencesRead",
    "ProfileUpdate",
    "RoleUpdate",
    "UserRead",
]
