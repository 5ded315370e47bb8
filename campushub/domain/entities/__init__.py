"""Domain entities exposed by the application."""

from .club import Club
from .comment import Comment
from .event import EVENT_CATEGORIES, Event
from .notification import NOTIFICATION_TYPES, Notification
from .registration import Registration
from .reminder import Reminder
from .user import (
    APPROVAL_STATUSES,
    DEFAULT_EMAIL_PREFERENCES,
    ORGANIZER_APPROVED,
    ORGANIZER_PENDING,
    ORGANIZER_REJECTED,
    ROLE_ADMIN,
    ROLE_CLUB_ORGANIZER,
    ROLE_STUDENT,
    ROLES,
    User,
)

__all__ = [
    "Club",
    "Comment",
    "Event",
    "EVENT_CATEGORIES",
    "Notification",
    "NOTIFICATION_TYPES",
    "Registration",
    "Reminder",
    "User",
    "ROLES",
    "ROLE_STUDENT",
    "ROLE_CLUB_ORGANIZER",
    "ROLE_ADMIN",
    "APPROVAL_STATUSES",
    "ORGANIZER_PENDING",
    "ORGANIZER_APPROVED",
    "ORGANIZER_REJECTED",
    "DEFAULT_EMAIL_PREFERENCES",
]
