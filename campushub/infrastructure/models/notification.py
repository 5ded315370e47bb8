"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    event_id = Column(Integer, nullable=True)
    event_title = Column(String(200), nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    action_url = Column(String(300), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
