"""Use case for authenticating users by email and password."""

from sqlalchemy.orm import Session

from campushub.domain.entities import User
from campushub.infrastructure.repositories import UserRepository
from campushub.infrastructure.security import verify_password


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """Return the user when the credentials match, otherwise ``None``."""

    credentials = UserRepository(session).get_credentials(email)
    if credentials is None:
        return None
    user, password_hash = credentials
    if not verify_password(password, password_hash):
        return None
    return user
