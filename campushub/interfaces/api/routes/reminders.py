"""Endpoints for event reminders."""

from fastapi import APIRouter, Depends, Response, status

from campushub.application.use_cases.events import get_event
from campushub.application.use_cases.reminders import (
    create_reminder,
    dispatch_due_reminders,
    get_default_reminder_time,
    get_reminder_time_options,
    list_reminders,
)
from campushub.interfaces.api.dependencies import (
    SessionContext,
    get_session_context,
    require_admin,
)
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import ReminderCreate, ReminderOption, ReminderRead
from campushub.utils import ensure_app_naive_datetime

router = APIRouter(tags=["reminders"])


@router.get("/events/{event_id}/reminders/options", response_model=list[ReminderOption])
async def read_reminder_options(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> list[ReminderOption]:
    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
        options = get_reminder_time_options(event.date, event.time)
    return [ReminderOption(label=label, value=value) for label, value in options]


@router.post(
    "/events/{event_id}/reminders",
    response_model=ReminderRead,
    status_code=status.HTTP_201_CREATED,
    responses={204: {"description": "Reminders are disabled for this user"}},
)
async def schedule_reminder(
    event_id: int,
    payload: ReminderCreate,
    context: SessionContext = Depends(get_session_context),
):
    """Schedule a reminder, defaulting to one day before the event."""

    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
        reminder_time = ensure_app_naive_datetime(
            payload.reminder_time
        ) or get_default_reminder_time(event.date, event.time)
        reminder = await create_reminder(context.store, context.user, event, reminder_time)
    if reminder is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return ReminderRead.model_validate(reminder)


@router.get("/reminders/me", response_model=list[ReminderRead])
async def read_my_reminders(
    context: SessionContext = Depends(get_session_context),
) -> list[ReminderRead]:
    reminders = await list_reminders(context.store, context.user.id)
    return [ReminderRead.model_validate(item) for item in reminders]


@router.post("/reminders/dispatch", response_model=list[ReminderRead])
async def dispatch_reminders(
    context: SessionContext = Depends(require_admin),
) -> list[ReminderRead]:
    """Send in-app notifications for every reminder that is due."""

    dispatched = await dispatch_due_reminders(context.store)
    return [ReminderRead.model_validate(item) for item in dispatched]
