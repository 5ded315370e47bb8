"""Endpoints for the in-app notification inbox."""

from fastapi import APIRouter, Depends, Query

from campushub.application.use_cases.notifications import (
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from campushub.interfaces.api.dependencies import SessionContext, get_session_context
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import MarkAllReadResponse, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationRead])
async def read_notifications(
    unread_only: bool = Query(default=False),
    context: SessionContext = Depends(get_session_context),
) -> list[NotificationRead]:
    notifications = await list_notifications(
        context.store, context.user.id, unread_only=unread_only
    )
    return [NotificationRead.model_validate(item) for item in notifications]


@router.post("/read-all", response_model=MarkAllReadResponse)
async def read_all_notifications(
    context: SessionContext = Depends(get_session_context),
) -> MarkAllReadResponse:
    updated = await mark_all_notifications_as_read(context.store, context.user.id)
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def read_notification(
    notification_id: int,
    context: SessionContext = Depends(get_session_context),
) -> NotificationRead:
    with translate_errors("Notification not found"):
        notification = await mark_notification_as_read(
            context.store, notification_id, user_id=context.user.id
        )
    return NotificationRead.model_validate(notification)
