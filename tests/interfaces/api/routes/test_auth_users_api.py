"""Integration tests for signup, sign-in, profiles and club requests."""

from __future__ import annotations

from fastapi.testclient import TestClient

PASSWORD = "correct-horse-battery"


def test_signup_and_sign_in_flow(client: TestClient, login) -> None:
    response = client.post(
        "/auth/signup",
        json={"full_name": "Ada Lovelace", "email": "ada@campus.edu", "password": PASSWORD},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["first_name"] == "Ada"
    assert created["last_name"] == "Lovelace"
    assert created["role"] == "student"
    assert "password" not in created

    token_response = client.post(
        "/auth/token", data={"username": "ada@campus.edu", "password": PASSWORD}
    )
    assert token_response.status_code == 200
    assert token_response.json()["role"] == "student"

    me = client.get("/users/me", headers=login("ada@campus.edu"))
    assert me.status_code == 200
    assert me.json()["email"] == "ada@campus.edu"
    assert me.json()["email_preferences"]["event_reminders"] is True


def test_signup_rejections(client: TestClient, make_user) -> None:
    make_user("taken@campus.edu")

    duplicate = client.post(
        "/auth/signup", json={"email": "taken@campus.edu", "password": PASSWORD}
    )
    short = client.post("/auth/signup", json={"email": "new@campus.edu", "password": "short"})
    admin = client.post(
        "/auth/signup",
        json={"email": "boss@campus.edu", "password": PASSWORD, "role": "admin"},
    )

    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "This email is already registered."
    assert short.json()["detail"] == "Password must be at least 12 characters for security."
    assert admin.json()["detail"] == "Please select a role."


def test_bad_credentials_and_missing_token(client: TestClient, make_user) -> None:
    make_user("student@campus.edu")

    bad = client.post(
        "/auth/token", data={"username": "student@campus.edu", "password": "wrong-password"}
    )

    assert bad.status_code == 401
    assert bad.json()["detail"] == "Incorrect email or password"
    assert client.get("/users/me").status_code == 401
    assert client.get("/users/me", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_profile_update_merges_preferences(client: TestClient, make_user, login) -> None:
    make_user("student@campus.edu")
    headers = login("student@campus.edu")

    response = client.put(
        "/users/me",
        headers=headers,
        json={"roll_number": "21CS042", "email_preferences": {"comment_replies": False}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["roll_number"] == "21CS042"
    assert body["email_preferences"]["comment_replies"] is False
    assert body["email_preferences"]["event_reminders"] is True

    prefs = client.get("/users/me/notification-preferences", headers=headers).json()
    assert prefs["email_comments"] is False
    assert prefs["in_app_notifications"] is True
    assert client.put("/users/me", headers=headers, json={"role": "admin"}).status_code == 422


def test_admin_manages_users_and_clubs(client: TestClient, make_user, login) -> None:
    make_user("admin@campus.edu", role="admin")
    organizer = make_user("org@campus.edu", role="club_organizer")
    make_user("student@campus.edu")
    admin_headers = login("admin@campus.edu")
    organizer_headers = login("org@campus.edu")

    assert client.get("/users/", headers=organizer_headers).status_code == 403
    pending = client.get(
        "/users/", headers=admin_headers, params={"organizer_status": "pending"}
    ).json()
    assert [user["email"] for user in pending] == ["org@campus.edu"]

    approved = client.put(
        f"/users/{organizer.id}/organizer-status",
        headers=admin_headers,
        json={"status": "approved"},
    )
    assert approved.json()["organizer_status"] == "approved"

    club = client.post(
        "/clubs/",
        headers=organizer_headers,
        json={"name": "Chess Club", "description": "Weekly blitz"},
    )
    assert club.status_code == 201
    assert club.json()["status"] == "pending"
    assert client.post(
        "/clubs/", headers=login("student@campus.edu"), json={"name": "Nope"}
    ).status_code == 403

    reviewed = client.put(
        f"/clubs/{club.json()['id']}/status", headers=admin_headers, json={"status": "approved"}
    )
    assert reviewed.json()["status"] == "approved"
    me = client.get("/users/me", headers=organizer_headers).json()
    assert me["club_ids"] == [club.json()["id"]]

    listed = client.get("/clubs/", headers=admin_headers, params={"status": "approved"}).json()
    assert [item["name"] for item in listed] == ["Chess Club"]

    promoted = client.put(
        f"/users/{organizer.id}/role", headers=admin_headers, json={"role": "admin"}
    )
    assert promoted.json()["role"] == "admin"
