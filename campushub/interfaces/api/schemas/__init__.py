from .auth import SignupRequest, Token
from .club import ClubCreate, ClubRead
from .comment import CommentCreate, CommentRead
from .email import SendEmailRequest, SendEmailResponse
from .event import (
    CalendarLinkResponse,
    EventCreate,
    EventRead,
    EventUpdate,
    TagSuggestionRequest,
    TagSuggestionResponse,
)
from .notification import MarkAllReadResponse, NotificationRead
from .registration import RegistrationCreate, RegistrationOutcome, RegistrationRead
from .reminder import ReminderCreate, ReminderOption, ReminderRead
from .user import (
    ApprovalStatusUpdate,
    EmailPreferences,
    EmailPreferencesUpdate,
    NotificationPreferencesRead,
    ProfileUpdate,
    RoleUpdate,
    UserRead,
)

__all__ = [
    "ApprovalStatusUpdate",
    "CalendarLinkResponse",
    "ClubCreate",
    "ClubRead",
    "CommentCreate",
    "CommentRead",
    "EmailPreferences",
    "EmailPreferencesUpdate",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "MarkAllReadResponse",
    "NotificationPreferencesRead",
    "NotificationRead",
    "ProfileUpdate",
    "RegistrationCreate",
    "RegistrationOutcome",
    "RegistrationRead",
    "ReminderCreate",
    "ReminderOption",
    "ReminderRead",
    "RoleUpdate",
    "SendEmailRequest",
    "SendEmailResponse",
    "SignupRequest",
    "TagSuggestionRequest",
    "TagSuggestionResponse",
    "Token",
    "UserRead",
]
