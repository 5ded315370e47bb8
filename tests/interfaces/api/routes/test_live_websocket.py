"""Integration tests for the live query websocket."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

PASSWORD = "correct-horse-battery"


def _token(client: TestClient, email: str) -> str:
    response = client.post("/auth/token", data={"username": email, "password": PASSWORD})
    return response.json()["access_token"]


def test_rejects_missing_or_invalid_token(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/live/ws") as websocket:
            websocket.receive_json()
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/live/ws?token=invalid") as websocket:
            websocket.receive_json()


def test_subscriptions_stream_snapshots(client: TestClient, make_user, make_event) -> None:
    student = make_user("student@campus.edu")
    event = make_event(student.id, title="Poetry Slam")
    token = _token(client, "student@campus.edu")

    with client.websocket_connect(f"/live/ws?token={token}") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json(
            {"type": "subscribe", "id": "upcoming", "table": "events", "order_by": "date"}
        )
        snapshot = websocket.receive_json()
        assert snapshot["type"] == "snapshot"
        assert snapshot["id"] == "upcoming"
        assert snapshot["is_loading"] is False
        assert [row["title"] for row in snapshot["data"]] == ["Poetry Slam"]

        websocket.send_json(
            {"type": "subscribe-doc", "id": "detail", "table": "events", "row_id": event.id}
        )
        document = websocket.receive_json()
        assert document["type"] == "document"
        assert document["exists"] is True
        assert document["data"]["id"] == event.id

        websocket.send_json({"type": "subscribe", "id": "people", "table": "users"})
        error = websocket.receive_json()
        assert error["type"] == "error"
        assert error["id"] == "people"

        websocket.send_json({"type": "unsubscribe", "id": "upcoming"})
        websocket.send_json({"type": "unsubscribe", "id": "detail"})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    feed = client.app.state.feed
    assert feed.subscription_count("events") == 0
    assert feed.subscription_count("users") == 0
