"""Threaded comments on past events."""

from __future__ import annotations

import logging
from typing import Optional

from campushub.application.rows import row_to_entity
from campushub.application.use_cases.notifications import (
    notify_event_comment,
    send_comment_email_notification,
)
from campushub.application.use_cases.users import get_user
from campushub.domain.entities import ROLE_STUDENT, Comment, Event, User
from campushub.infrastructure.store import StoreClient, create_row, update_row

logger = logging.getLogger(__name__)


def build_comment_threads(rows: list[dict]) -> list[Comment]:
    """Group ``rows`` into top-level comments carrying their replies."""

    comments = [row_to_entity(Comment, row) for row in rows]
    by_id = {comment.id: comment for comment in comments if comment.parent_id is None}
    threads: list[Comment] = []
    for comment in comments:
        if comment.parent_id is None:
            threads.append(comment)
            continue
        parent = by_id.get(comment.parent_id)
        if parent is not None:
            parent.replies.append(comment)
    for thread in threads:
        thread.replies.sort(key=lambda reply: (reply.created_at is None, reply.created_at))
    return threads


async def list_event_comments(store: StoreClient, event_id: int) -> list[Comment]:
    """Return top-level comments newest first, each with its replies."""

    rows = await store.select(
        "comments", filters={"event_id": event_id}, order_by="-created_at"
    )
    return build_comment_threads(rows)


def _author_name(user: User) -> str:
    return user.full_name or "User"


async def add_comment(
    store: StoreClient,
    user: User,
    event: Event,
    text: str,
    *,
    parent_id: Optional[int] = None,
) -> Comment:
    """Post a comment or reply; only past events accept feedback."""

    if not user.has_role(ROLE_STUDENT):
        raise PermissionError("Only students can comment on events.")
    text = (text or "").strip()
    if not text:
        raise ValueError("Comment text is required.")
    if not event.is_past:
        raise ValueError("Comments are only available for past events.")
    if parent_id is not None:
        parent = await store.select_one("comments", parent_id)
        if parent["event_id"] != event.id:
            raise ValueError("Reply must belong to the same event.")
        if parent.get("parent_id") is not None:
            parent_id = parent["parent_id"]

    row = await create_row(
        store,
        "comments",
        {
            "event_id": event.id,
            "user_id": user.id,
            "author_name": _author_name(user),
            "author_avatar": user.avatar,
            "text": text,
            "parent_id": parent_id,
            "likes": 0,
        },
    )
    comment = row_to_entity(Comment, row)

    if parent_id is None and event.organizer_id != user.id:
        try:
            await notify_event_comment(
                store,
                event_id=event.id,
                event_title=event.title,
                commenter_name=comment.author_name,
                comment_text=text,
            )
            organizer = await get_user(store, event.organizer_id)
            await send_comment_email_notification(
                organizer, comment.author_name, text, event.title
            )
        except Exception:
            logger.exception("Could not notify organizer about comment %s", comment.id)
    return comment


async def like_comment(store: StoreClient, user: User, comment_id: int) -> Comment:
    """Increment the like counter of ``comment_id``."""

    if not user.has_role(ROLE_STUDENT):
        raise PermissionError("Only students can like comments.")
    current = await store.select_one("comments", comment_id)
    row = await update_row(
        store, "comments", comment_id, {"likes": (current.get("likes") or 0) + 1}
    )
    return row_to_entity(Comment, row)
