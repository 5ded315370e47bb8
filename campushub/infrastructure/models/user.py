"""SQLAlchemy model for the users table."""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a user profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False, info={"private": True})
    first_name = Column(String(80), nullable=False, default="")
    last_name = Column(String(80), nullable=False, default="")
    avatar = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default="student", index=True)
    club_ids = Column(JSON, nullable=False, default=list)
    roll_number = Column(String(50), nullable=True)
    branch = Column(String(50), nullable=True)
    section = Column(String(20), nullable=True)
    organizer_status = Column(String(20), nullable=True, index=True)
    email_preferences = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel"]
