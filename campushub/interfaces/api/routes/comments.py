"""Endpoints for event feedback threads."""

from fastapi import APIRouter, Depends, status

from campushub.application.use_cases.comments import (
    add_comment,
    like_comment,
    list_event_comments,
)
from campushub.application.use_cases.events import get_event
from campushub.interfaces.api.dependencies import SessionContext, get_session_context
from campushub.interfaces.api.routes_helpers import translate_errors
from campushub.interfaces.api.schemas import CommentCreate, CommentRead

router = APIRouter(tags=["comments"])


@router.get("/events/{event_id}/comments", response_model=list[CommentRead])
async def read_event_comments(
    event_id: int,
    context: SessionContext = Depends(get_session_context),
) -> list[CommentRead]:
    with translate_errors("Event not found"):
        await get_event(context.store, event_id)
        comments = await list_event_comments(context.store, event_id)
    return [CommentRead.model_validate(comment) for comment in comments]


@router.post(
    "/events/{event_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    event_id: int,
    payload: CommentCreate,
    context: SessionContext = Depends(get_session_context),
) -> CommentRead:
    with translate_errors("Event not found"):
        event = await get_event(context.store, event_id)
        comment = await add_comment(context.store, context.user, event, payload.text)
    return CommentRead.model_validate(comment)


@router.post(
    "/comments/{comment_id}/replies",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def post_reply(
    comment_id: int,
    payload: CommentCreate,
    context: SessionContext = Depends(get_session_context),
) -> CommentRead:
    with translate_errors("Comment not found"):
        parent = await context.store.select_one("comments", comment_id)
        event = await get_event(context.store, parent["event_id"])
        reply = await add_comment(
            context.store, context.user, event, payload.text, parent_id=comment_id
        )
    return CommentRead.model_validate(reply)


@router.post("/comments/{comment_id}/like", response_model=CommentRead)
async def post_like(
    comment_id: int,
    context: SessionContext = Depends(get_session_context),
) -> CommentRead:
    with translate_errors("Comment not found"):
        comment = await like_comment(context.store, context.user, comment_id)
    return CommentRead.model_validate(comment)
