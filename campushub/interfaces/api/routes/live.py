"""Websocket endpoint streaming live query snapshots and notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect

from campushub.infrastructure.database import SessionLocal
from campushub.infrastructure.notifications import LiveQueryError, LiveQuerySession
from campushub.infrastructure.store import StoreError, UnknownTableError
from campushub.interfaces.api.dependencies import resolve_current_user

router = APIRouter(prefix="/live", tags=["live"])
logger = logging.getLogger(__name__)


async def _handle_message(
    websocket: WebSocket, queries: LiveQuerySession, message: dict[str, Any]
) -> None:
    message_type = message.get("type")
    subscription_id = str(message.get("id", ""))

    if message_type == "ping":
        await websocket.send_json({"type": "pong"})
        return
    if message_type == "unsubscribe":
        queries.unsubscribe(subscription_id)
        return

    if not subscription_id:
        await websocket.send_json({"type": "error", "detail": "Subscription id is required"})
        return
    try:
        if message_type == "subscribe":
            await queries.subscribe(
                subscription_id,
                str(message.get("table", "")),
                filters=message.get("filters") or None,
                order_by=message.get("order_by"),
            )
        elif message_type == "subscribe-doc":
            await queries.subscribe_document(
                subscription_id, str(message.get("table", "")), message.get("row_id")
            )
        else:
            await websocket.send_json(
                {"type": "error", "id": subscription_id, "detail": "Unknown message type"}
            )
    except (LiveQueryError, UnknownTableError, StoreError) as exc:
        await websocket.send_json({"type": "error", "id": subscription_id, "detail": str(exc)})


@router.websocket("/ws")
async def live_websocket(websocket: WebSocket) -> None:
    """Authenticate with ``?token=`` then accept subscribe/unsubscribe messages."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    state = websocket.app.state
    manager = state.manager
    queries = LiveQuerySession(state.store, user, websocket.send_json)

    await manager.connect(user.id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                await websocket.send_json({"type": "error", "detail": "Invalid message"})
                continue

            if not isinstance(message, dict):
                continue
            await _handle_message(websocket, queries, message)
    except WebSocketDisconnect:
        logger.debug("Live connection closed for user %s", user.id)
    finally:
        queries.close()
        manager.disconnect(user.id, websocket)
