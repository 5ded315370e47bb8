"""Domain entity representing a user profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ROLE_STUDENT = "student"
ROLE_CLUB_ORGANIZER = "club_organizer"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_CLUB_ORGANIZER, ROLE_ADMIN)

ORGANIZER_PENDING = "pending"
ORGANIZER_APPROVED = "approved"
ORGANIZER_REJECTED = "rejected"
APPROVAL_STATUSES = (ORGANIZER_PENDING, ORGANIZER_APPROVED, ORGANIZER_REJECTED)

DEFAULT_EMAIL_PREFERENCES: dict[str, bool] = {
    "event_reminders": True,
    "comment_replies": True,
    "registration_confirmations": True,
}


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    email: str
    first_name: str
    last_name: str = ""
    role: str = ROLE_STUDENT
    avatar: str | None = None
    club_ids: list[int] = field(default_factory=list)
    roll_number: str | None = None
    branch: str | None = None
    section: str | None = None
    organizer_status: str | None = None
    email_preferences: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def can_manage_events(self) -> bool:
        """Admins and approved club organizers may create and edit events."""

        if self.is_admin():
            return True
        return self.has_role(ROLE_CLUB_ORGANIZER) and self.organizer_status == ORGANIZER_APPROVED

    def wants_email(self, preference: str) -> bool:
        """Return ``False`` only when ``preference`` was explicitly disabled."""

        return (self.email_preferences or {}).get(preference) is not False


__all__ = [
    "User",
    "ROLE_STUDENT",
    "ROLE_CLUB_ORGANIZER",
    "ROLE_ADMIN",
    "ROLES",
    "ORGANIZER_PENDING",
    "ORGANIZER_APPROVED",
    "ORGANIZER_REJECTED",
    "APPROVAL_STATUSES",
    "DEFAULT_EMAIL_PREFERENCES",
]
