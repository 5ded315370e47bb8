"""Repository implementations backed by SQLAlchemy."""

from .user_repository import UserRepository

__all__ = ["UserRepository"]
