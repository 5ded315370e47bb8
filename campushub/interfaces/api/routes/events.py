"""Endpoints for events, tag suggestions, calendar exports and images."""

import logging
from typing import Callable, Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)

from campushub.application.use_cases.events import (
    TagSuggestionValidationError,
    create_event,
    delete_event,
    get_event,
    list_events,
    set_event_image,
    suggest_event_tags,
    update_event,
)
from campushub.domain.entities import Event
from campushub.infrastructure.openai_client import (
    OpenAIConfigurationError,
    OpenAIServiceError,
    TagSuggestionService,
)
from campushub.infrastructure.storage import StorageConfigurationError, StorageError
from campushub.interfaces.api.dependencies import (
    SessionContext,
    get_session_context,
    get_tag_service_factory,
    require_organizer,
)
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import (
    CalendarLinkResponse,
    EventCreate,
    EventRead,
    EventUpdate,
    TagSuggestionRequest,
    TagSuggestionResponse,
)
from campushub.utils.calendar import (
    create_calendar_event,
    generate_google_calendar_url,
    generate_ical_content,
    ical_filename,
)

router = APIRouter(prefix="/events", tags=["events"])
logger = logging.getLogger(__name__)

_SUGGESTION_FAILED = "Failed to get suggestions. Please try again later."


def _calendar_event(event: Event):
    return create_calendar_event(
        title=event.title,
        date=event.date,
        time=event.time,
        description=event.description,
        venue=event.venue,
    )


@router.get("/", response_model=list[EventRead])
async def list_all_events(
    past: Optional[bool] = Query(default=None),
    category: Optional[str] = Query(default=None),
    organizer_id: Optional[int] = Query(default=None),
    context: SessionContext = Depends(get_session_context),
) -> list[EventRead]:
    with translate_errors():
        events = await list_events(
            context.store, past=past, category=category, organizer_id=organizer_id
        )
    return [EventRead.model_validate(event) for event in events]


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_new_event(
    payload: EventCreate,
    context: SessionContext = Depends(require_organizer),
) -> EventRead:
    with translate_errors():
        event = await create_event(context.store, context.user, payload.model_dump())
    return EventRead.model_validate(event)


@router.post("/suggest-tags", response_model=TagSuggestionResponse)
async def suggest_tags(
    payload: TagSuggestionRequest,
    service_factory: Callable[[], TagSuggestionService] = Depends(get_tag_service_factory),
    _: SessionContext = Depends(get_session_context),
) -> TagSuggestionResponse:
    """Suggest tags for an event description using the configured model."""

    try:
        result = await suggest_event_tags(payload.description, service_factory)
    except TagSuggestionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except OpenAIConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except OpenAIServiceError as exc:
        logger.error("Tag suggestion failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=_SUGGESTION_FAILED
        ) from exc
    return TagSuggestionResponse(**result)


@router.get("/{event_id}", response_model=EventRead)
async def read_event(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> EventRead:
    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
    return EventRead.model_validate(event)


@router.put("/{event_id}", response_model=EventRead)
async def edit_event(
    event_id: int,
    payload: EventUpdate,
    context: SessionContext = Depends(require_organizer),
) -> EventRead:
    with translate_errors("Event not found"):
        event = await update_event(
            context.store, context.user, event_id, payload.model_dump(exclude_unset=True)
        )
    return EventRead.model_validate(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_event(
    event_id: int,
    context: SessionContext = Depends(require_organizer),
) -> Response:
    with translate_errors("Event not found"):
        await delete_event(context.store, context.user, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{event_id}/calendar/google", response_model=CalendarLinkResponse)
async def google_calendar_link(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> CalendarLinkResponse:
    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
    return CalendarLinkResponse(url=generate_google_calendar_url(_calendar_event(event)))


@router.get("/{event_id}/calendar.ics")
async def download_ical(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> Response:
    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
    return Response(
        content=generate_ical_content(_calendar_event(event)),
        media_type="text/calendar",
        headers={
            "Content-Disposition": f'attachment; filename="{ical_filename(event.title)}"'
        },
    )


@router.post("/{event_id}/image", response_model=EventRead)
async def upload_image(
    event_id: int,
    file: UploadFile = File(...),
    context: SessionContext = Depends(require_organizer),
) -> EventRead:
    data = await file.read()
    try:
        with translate_errors("Event not found"):
            event = await set_event_image(
                context.store,
                context.user,
                event_id,
                filename=file.filename or "",
                data=data,
                content_type=file.content_type,
            )
    except StorageConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not upload image. Please try again.",
        ) from exc
    return EventRead.model_validate(event)
