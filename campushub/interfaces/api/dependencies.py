"""FastAPI dependency utilities."""

from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from campushub.domain.entities import User
from campushub.infrastructure.database import get_db
from campushub.infrastructure.openai_client import TagSuggestionService
from campushub.infrastructure.repositories import UserRepository
from campushub.infrastructure.security import decode_access_token
from campushub.infrastructure.store import StoreClient

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


@dataclass
class SessionContext:
    """The signed-in user together with the store used to serve the request."""

    user: User
    store: StoreClient


def _credentials_exception(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_exception("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_store(request: Request) -> StoreClient:
    return request.app.state.store


def get_session_context(
    current_user: User = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
) -> SessionContext:
    return SessionContext(user=current_user, store=store)


def require_admin(context: SessionContext = Depends(get_session_context)) -> SessionContext:
    """Ensure the authenticated user has administrator privileges."""

    if not context.user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return context


def require_organizer(
    context: SessionContext = Depends(get_session_context),
) -> SessionContext:
    """Ensure the user is an admin or an approved club organizer."""

    if not context.user.can_manage_events():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only approved organizers can manage events.",
        )
    return context


def get_tag_service_factory() -> Callable[[], TagSuggestionService]:
    """Return the factory used to build :class:`TagSuggestionService` on demand."""

    return TagSuggestionService
