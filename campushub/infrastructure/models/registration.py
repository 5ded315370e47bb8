"""SQLAlchemy model for the registrations table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class RegistrationModel(Base):
    """Database representation of an event registration."""

    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_registrations_event_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    full_name = Column(String(160), nullable=False)
    email = Column(String(120), nullable=False)
    roll_number = Column(String(50), nullable=False)
    branch = Column(String(50), nullable=False)
    section = Column(String(20), nullable=False)
    title = Column(String(200), nullable=True)
    date = Column(String(10), nullable=True)
    time = Column(String(8), nullable=True)
    venue = Column(String(200), nullable=True)
    club_name = Column(String(120), nullable=True)
    registered_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["RegistrationModel"]
