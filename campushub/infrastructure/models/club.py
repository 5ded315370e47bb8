"""SQLAlchemy model for the clubs table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class ClubModel(Base):
    """Database representation of a club request."""

    __tablename__ = "clubs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=False, default="")
    logo = Column(String(500), nullable=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ClubModel"]
