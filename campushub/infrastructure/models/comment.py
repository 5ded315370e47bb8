"""SQLAlchemy model for comments and replies."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from campushub.infrastructure.database import Base
from campushub.utils import now_in_app_naive_datetime


class CommentModel(Base):
    """Database representation of a comment; replies set ``parent_id``."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    author_name = Column(String(160), nullable=False)
    author_avatar = Column(String(500), nullable=True)
    text = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id"), nullable=True, index=True)
    likes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["CommentModel"]
