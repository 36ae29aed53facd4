from __future__ import annotations

import pytest

from openbalti.auth.settings import get_auth_settings
from openbalti.db import collections as c
from openbalti.security.passwords import verify_password
from tests.helpers import DEFAULT_PASSWORD, auth_headers


@pytest.mark.asyncio
async def test_signup_creates_user(client, db):
    r = await client.post(
        "/api/auth/signup",
        json={"name": " Amina ", "email": "Amina@Example.com", "password": "skardu-valley"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["email"] == "amina@example.com"
    assert body["data"]["name"] == "Amina"
    assert body["data"]["role"] == "user"
    assert "password" not in body["data"]

    stored = await db[c.USERS].find_one({"email": "amina@example.com"})
    assert verify_password("skardu-valley", stored["password"])
    assert stored["contributionStats"] == {"wordsAdded": 0, "wordsEdited": 0, "wordsReviewed": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload,status,error",
    [
        ({"name": "A", "email": "a@example.com"}, 400, "Name, email, and password are required"),
        ({"name": "A", "email": "not-an-email", "password": "long-enough"}, 400, "Please enter a valid email"),
        ({"name": "A", "email": "a@example.com", "password": "short"}, 400, "Password must be at least 8 characters"),
    ],
)
async def test_signup_rejects_bad_input(client, payload, status, error):
    r = await client.post("/api/auth/signup", json=payload)
    assert r.status_code == status
    assert r.json()["success"] is False
    assert r.json()["error"] == error


@pytest.mark.asyncio
async def test_signup_duplicate_email(client, user):
    r = await client.post(
        "/api/auth/signup", json={"name": "Again", "email": user["email"].upper(), "password": "another-pass"}
    )
    assert r.status_code == 409
    assert r.json()["error"] == "User with this email already exists"


@pytest.mark.asyncio
async def test_signin_sets_cookie_and_session(client, user):
    r = await client.post("/api/auth/signin", json={"email": user["email"], "password": DEFAULT_PASSWORD})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["user"]["id"] == str(user["_id"])
    assert data["token"]
    assert get_auth_settings().cookie_name in r.cookies

    # the client now carries the cookie
    session = await client.get("/api/auth/session")
    assert session.json()["data"]["email"] == user["email"]


@pytest.mark.asyncio
async def test_signin_wrong_password(client, user):
    r = await client.post("/api/auth/signin", json={"email": user["email"], "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_signin_missing_fields(client):
    r = await client.post("/api/auth/signin", json={"email": "x@example.com"})
    assert r.status_code == 400
    assert r.json()["error"] == "Email and password are required"


@pytest.mark.asyncio
async def test_session_with_bearer_and_anonymous(client, user):
    r = await client.get("/api/auth/session", headers=auth_headers(user))
    assert r.json()["data"]["name"] == "Amina"

    anon = await client.get("/api/auth/session", headers={"Authorization": "Bearer bad.token.value"})
    assert anon.json() == {"success": True, "data": None}


@pytest.mark.asyncio
async def test_signout_clears_cookie(client):
    r = await client.post("/api/auth/signout")
    assert r.status_code == 200
    assert r.json()["message"] == "Signed out"
    assert get_auth_settings().cookie_name in r.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_role_change_applies_without_new_token(client, db, user):
    headers = auth_headers(user)
    r = await client.get("/api/admin/users", headers=headers)
    assert r.status_code == 403

    await db[c.USERS].update_one({"_id": user["_id"]}, {"$set": {"role": "admin"}})
    r = await client.get("/api/admin/users", headers=headers)
    assert r.status_code == 200
