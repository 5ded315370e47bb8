"""Use case for signing up and provisioning a user profile."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from campushub.domain.entities import (
    DEFAULT_EMAIL_PREFERENCES,
    ORGANIZER_PENDING,
    ROLE_CLUB_ORGANIZER,
    ROLE_STUDENT,
    User,
)
from campushub.infrastructure.repositories import UserRepository
from campushub.infrastructure.security import get_password_hash

logger = logging.getLogger(__name__)

SELF_SERVICE_ROLES = (ROLE_STUDENT, ROLE_CLUB_ORGANIZER)
MIN_PASSWORD_LENGTH = 12


def split_full_name(full_name: str | None, email: str) -> tuple[str, str]:
    """Split ``full_name`` on the first space, defaulting to the email local part."""

    parts = (full_name or "").strip().split()
    if parts:
        return parts[0], " ".join(parts[1:])
    return email.split("@")[0], ""


def register_user(
    session: Session,
    *,
    email: str,
    password: str,
    full_name: str | None = None,
    role: str = ROLE_STUDENT,
    allowed_roles: tuple[str, ...] = SELF_SERVICE_ROLES,
) -> User:
    """Create the account and its profile row."""

    if role not in allowed_roles:
        raise ValueError("Please select a role.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError("Password must be at least 12 characters for security.")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("This email is already registered.")

    first_name, last_name = split_full_name(full_name, email)
    user = User(
        id=None,
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        organizer_status=ORGANIZER_PENDING if role == ROLE_CLUB_ORGANIZER else None,
        email_preferences=dict(DEFAULT_EMAIL_PREFERENCES),
    )
    created = repository.create(user, get_password_hash(password))
    logger.info("Provisioned %s profile for %s", created.role, created.email)
    return created
