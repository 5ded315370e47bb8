"""ORM models used by the application infrastructure."""

from .club import ClubModel
from .comment import CommentModel
from .event import EventModel
from .notification import NotificationModel
from .registration import RegistrationModel
from .reminder import ReminderModel
from .user import UserModel

TABLE_MODELS = {
    model.__tablename__: model
    for model in (
        UserModel,
        ClubModel,
        EventModel,
        RegistrationModel,
        CommentModel,
        ReminderModel,
        NotificationModel,
    )
}

__all__ = [
    "ClubModel",
    "CommentModel",
    "EventModel",
    "NotificationModel",
    "RegistrationModel",
    "ReminderModel",
    "UserModel",
    "TABLE_MODELS",
]
