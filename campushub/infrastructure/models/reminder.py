"""SQLAlchemy model for event reminders."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class ReminderModel(Base):
    """Database representation of a reminder."""

    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    event_title = Column(String(200), nullable=False)
    event_date = Column(String(32), nullable=False)
    reminder_time = Column(DateTime, nullable=False)
    sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ReminderModel"]
