"""Persistence layer for user credentials."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campushub.domain.entities import User
from campushub.infrastructure.models import UserModel


class UserRepository:
    """Synchronous access to users, including their password hashes.

    Profile reads and writes go through the store client; this repository
    backs authentication, which needs the private password column.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model_by_email(email)
        return self._to_entity(model) if model else None

    def get_credentials(self, email: str) -> tuple[User, str] | None:
        model = self._get_model_by_email(email)
        if model is None:
            return None
        return self._to_entity(model), model.password

    def create(self, user: User, password_hash: str) -> User:
        model = UserModel(password=password_hash)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model_by_email(self, email: str) -> UserModel | None:
        statement = select(UserModel).where(
            func.lower(UserModel.email) == email.strip().lower()
        )
        return self.session.scalars(statement).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            avatar=model.avatar,
            club_ids=list(model.club_ids or []),
            roll_number=model.roll_number,
            branch=model.branch,
            section=model.section,
            organizer_status=model.organizer_status,
            email_preferences=dict(model.email_preferences or {}),
            created_at=model.created_at,
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.email = user.email.strip().lower()
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.role = user.role
        model.avatar = user.avatar
        model.club_ids = list(user.club_ids)
        model.roll_number = user.roll_number
        model.branch = user.branch
        model.section = user.section
        model.organizer_status = user.organizer_status
        model.email_preferences = dict(user.email_preferences)


__all__ = ["UserRepository"]
