"""Endpoints for club requests."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from campushub.application.use_cases.clubs import list_clubs, request_club, review_club
from campushub.domain.entities import ROLE_CLUB_ORGANIZER
from campushub.interfaces.api.dependencies import (
    SessionContext,
    get_session_context,
    require_admin,
)
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import ApprovalStatusUpdate, ClubCreate, ClubRead

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.post("/", response_model=ClubRead, status_code=status.HTTP_201_CREATED)
async def create_club_request(
    payload: ClubCreate,
    context: SessionContext = Depends(get_session_context),
) -> ClubRead:
    user = context.user
    if not (user.is_admin() or user.has_role(ROLE_CLUB_ORGANIZER)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only club organizers can request clubs.",
        )
    with translate_errors():
        club = await request_club(
            context.store,
            user,
            name=payload.name,
            description=payload.description,
            logo=payload.logo,
        )
    return ClubRead.model_validate(club)


@router.get("/", response_model=list[ClubRead])
async def list_club_requests(
    club_status: Optional[str] = Query(default=None, alias="status"),
    organizer_id: Optional[int] = Query(default=None),
    context: SessionContext = Depends(get_session_context),
) -> list[ClubRead]:
    with translate_errors():
        clubs = await list_clubs(context.store, status=club_status, organizer_id=organizer_id)
    return [ClubRead.model_validate(club) for club in clubs]


@router.put("/{club_id}/status", response_model=ClubRead)
async def update_club_status(
    club_id: int,
    payload: ApprovalStatusUpdate,
    context: SessionContext = Depends(require_admin),
) -> ClubRead:
    with translate_errors("Club not found"):
        club = await review_club(context.store, club_id, payload.status)
    return ClubRead.model_validate(club)
