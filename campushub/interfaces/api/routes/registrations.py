"""Endpoints for registering to events."""

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Request, status

from campushub.application.use_cases.events import ensure_can_edit, get_event
from campushub.application.use_cases.registrations import (
    AlreadyRegisteredError,
    RegistrationForm,
    RegistrationInProgressError,
    RegistrationResult,
    RegistrationWorkflow,
    find_registration,
    list_event_registrations,
    list_user_registrations,
)
from campushub.interfaces.api.dependencies import SessionContext, get_session_context
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import (
    RegistrationCreate,
    RegistrationOutcome,
    RegistrationRead,
)

router = APIRouter(tags=["registrations"])

_IN_PROGRESS = "A registration request is already in progress."


@contextmanager
def _single_flight(request: Request, key: tuple[int, int]) -> Iterator[None]:
    """Reject a second registration change for the same user and event."""

    in_flight: set = request.app.state.registrations_in_flight
    if key in in_flight:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=_IN_PROGRESS)
    in_flight.add(key)
    try:
        yield
    finally:
        in_flight.discard(key)


def _outcome(result: RegistrationResult) -> RegistrationOutcome:
    registration = (
        RegistrationRead.model_validate(result.registration)
        if result.registration is not None
        else None
    )
    return RegistrationOutcome(
        state=result.state,
        registration=registration,
        failed_steps=list(result.failed_steps),
    )


@router.post(
    "/events/{event_id}/registrations",
    response_model=RegistrationOutcome,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_event(
    event_id: int,
    payload: RegistrationCreate,
    request: Request,
    context: SessionContext = Depends(get_session_context),
) -> RegistrationOutcome:
    with _single_flight(request, (context.user.id, event_id)):
        with translate_errors("Event not found"):
            event = await get_event(context.store, event_id)
            workflow = await RegistrationWorkflow.load(context.store, context.user, event)
            try:
                result = await workflow.register(RegistrationForm(**payload.model_dump()))
            except (AlreadyRegisteredError, RegistrationInProgressError) as exc:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT, detail=str(exc)
                ) from exc
    return _outcome(result)


@router.delete("/events/{event_id}/registrations/me", response_model=RegistrationOutcome)
async def unregister_from_event(
    event_id: int,
    request: Request,
    context: SessionContext = Depends(get_session_context),
) -> RegistrationOutcome:
    with _single_flight(request, (context.user.id, event_id)):
        with translate_errors("Event not found"):
            event = await get_event(context.store, event_id)
            workflow = await RegistrationWorkflow.load(context.store, context.user, event)
            try:
                result = await workflow.unregister()
            except RegistrationInProgressError as exc:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT, detail=str(exc)
                ) from exc
    return _outcome(result)


@router.get("/events/{event_id}/registrations/me", response_model=RegistrationRead)
async def read_my_registration(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> RegistrationRead:
    registration = await find_registration(context.store, context.user.id, event_id)
    if registration is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not registered")
    return RegistrationRead.model_validate(registration)


@router.get("/events/{event_id}/registrations", response_model=list[RegistrationRead])
async def read_event_registrations(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> list[RegistrationRead]:
    """List attendees; restricted to the event's organizer and admins."""

    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
        ensure_can_edit(context.user, event)
        registrations = await list_event_registrations(context.store, event_id)
    return [RegistrationRead.model_validate(item) for item in registrations]


@router.get("/registrations/me", response_model=list[RegistrationRead])
async def read_my_registrations(
    context: SessionContext = Depends(get_session_context),
) -> list[RegistrationRead]:
    registrations = await list_user_registrations(context.store, context.user.id)
    return [RegistrationRead.model_validate(item) for item in registrations]
