"""Endpoints for user profiles and their administration."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campushub.application.use_cases.notifications import get_notification_preferences
from campushub.application.use_cases.users import (
    change_user_role,
    list_users,
    set_organizer_status,
    update_profile,
)
from campushub.interfaces.api.dependencies import (
    SessionContext,
    get_session_context,
    require_admin,
)
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import (
    ApprovalStatusUpdate,
    NotificationPreferencesRead,
    ProfileUpdate,
    RoleUpdate,
    UserRead,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(context: SessionContext = Depends(get_session_context)) -> UserRead:
    return UserRead.model_validate(context.user)


@router.put("/me", response_model=UserRead)
async def update_current_user(
    payload: ProfileUpdate,
    context: SessionContext = Depends(get_session_context),
) -> UserRead:
    with translate_errors("User not found"):
        user = await update_profile(
            context.store, context.user, payload.model_dump(exclude_unset=True)
        )
    return UserRead.model_validate(user)


@router.get("/me/notification-preferences", response_model=NotificationPreferencesRead)
def read_notification_preferences(
    context: SessionContext = Depends(get_session_context),
) -> NotificationPreferencesRead:
    return NotificationPreferencesRead(**get_notification_preferences(context.user))


@router.get("/", response_model=list[UserRead])
async def list_all_users(
    role: Optional[str] = Query(default=None),
    organizer_status: Optional[str] = Query(default=None),
    context: SessionContext = Depends(require_admin),
) -> list[UserRead]:
    """List users, e.g. ``?role=club_organizer&organizer_status=pending``."""

    with translate_errors():
        users = await list_users(context.store, role=role, organizer_status=organizer_status)
    return [UserRead.model_validate(user) for user in users]


@router.put("/{user_id}/role", response_model=UserRead)
async def update_user_role(
    user_id: int,
    payload: RoleUpdate,
    context: SessionContext = Depends(require_admin),
) -> UserRead:
    with translate_errors("User not found"):
        user = await change_user_role(context.store, user_id, payload.role)
    return UserRead.model_validate(user)


@router.put("/{user_id}/organizer-status", response_model=UserRead)
async def update_organizer_status(
    user_id: int,
    payload: ApprovalStatusUpdate,
    context: SessionContext = Depends(require_admin),
) -> UserRead:
    with translate_errors("User not found"):
        user = await set_organizer_status(context.store, user_id, payload.status)
    return UserRead.model_validate(user)
