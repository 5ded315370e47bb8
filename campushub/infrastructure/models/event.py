"""SQLAlchemy model for the events table."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class EventModel(Base):
    """Database representation of a campus event."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    long_description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    date = Column(String(10), nullable=False, index=True)
    time = Column(String(8), nullable=False)
    venue = Column(String(200), nullable=False)
    club_name = Column(String(120), nullable=False)
    club_id = Column(Integer, ForeignKey("clubs.id"), nullable=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String(20), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    is_past = Column(Boolean, nullable=False, default=False, index=True)
    registration_count = Column(Integer, nullable=True, default=0)
    registration_link = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["EventModel"]
