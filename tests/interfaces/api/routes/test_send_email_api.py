"""Integration tests for the transactional email endpoint."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from campushub.interfaces.api.routes import email as email_route

MESSAGE = {"to": "friend@campus.edu", "subject": "Hello", "html": "<p>Hi there</p>"}


@pytest.fixture
def headers(make_user, login):
    make_user("student@campus.edu")
    return login("student@campus.edu")


def test_requires_authentication(client: TestClient) -> None:
    assert client.post("/api/send-email", json=MESSAGE).status_code == 401


def test_missing_fields(client: TestClient, headers) -> None:
    response = client.post("/api/send-email", headers=headers, json={"to": "a@b.co"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: to, subject, html"


def test_unconfigured_service(client: TestClient, headers) -> None:
    response = client.post("/api/send-email", headers=headers, json=MESSAGE)

    assert response.status_code == 500
    assert response.json()["detail"] == "Email service not configured"


def test_send_success_and_failure(
    client: TestClient, headers, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls = []
    outcome = {"sent": True}

    def fake_send(subject, html_content, recipient, *, text_content=None):
        calls.append((subject, html_content, recipient, text_content))
        return outcome["sent"]

    monkeypatch.setattr(email_route, "is_email_configured", lambda: True)
    monkeypatch.setattr(email_route, "send_email", fake_send)

    ok = client.post("/api/send-email", headers=headers, json={**MESSAGE, "text": "Hi"})
    assert ok.status_code == 200
    assert ok.json() == {"success": True, "message": "Email sent successfully"}
    assert calls == [("Hello", "<p>Hi there</p>", "friend@campus.edu", "Hi")]

    outcome["sent"] = False
    failed = client.post("/api/send-email", headers=headers, json=MESSAGE)
    assert failed.status_code == 500
    assert failed.json()["detail"] == "Failed to send email"
