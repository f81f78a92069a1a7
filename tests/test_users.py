import asyncio
import logging
import time
import uuid

import pytest

from vidtube.core.config import settings
from vidtube.core.passwords import verify_password
from vidtube.core.security import Principal, get_principal
from vidtube.main import app
from vidtube.modules.users import service as user_service


def _register_form(**overrides):
    data = {"username": "Carol", "email": "carol@example.com", "fullName": "Carol C", "password": "pw12345"}
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


AVATAR = {"avatar": ("me.png", b"avatar-bytes", "image/png")}


@pytest.mark.asyncio
async def test_register_uploads_avatar_and_cover(client, storage, staging_dir):
    files = {**AVATAR, "coverImage": ("cover.jpg", b"cover-bytes", "image/jpeg")}

    resp = await client.post("/users/register", data=_register_form(), files=files)

    assert resp.status_code == 201
    user = resp.json()["data"]
    assert user["username"] == "carol"
    assert user["email"] == "carol@example.com"
    assert user["avatar"].startswith("https://media.test/image/upload/")
    assert user["cover_image"].endswith(".jpg")
    assert "password_hash" not in user
    assert len(storage.objects) == 2
    assert not staging_dir.exists() or not any(staging_dir.iterdir())


@pytest.mark.asyncio
async def test_register_rejects_duplicates_before_uploading(client, storage):
    resp = await client.post("/users/register", data=_register_form(username="Alice"), files=AVATAR)

    assert resp.status_code == 409
    assert storage.calls == []


@pytest.mark.asyncio
async def test_register_validation(client, storage):
    missing = await client.post("/users/register", data=_register_form(password=None), files=AVATAR)
    bad_email = await client.post("/users/register", data=_register_form(email="not-an-email"), files=AVATAR)
    no_avatar = await client.post("/users/register", data=_register_form())

    assert missing.status_code == 400
    assert missing.json()["errorDetails"] == ["password is required"]
    assert bad_email.status_code == 400
    assert no_avatar.status_code == 400
    assert no_avatar.json()["message"] == "Avatar file is required"
    assert storage.calls == []


@pytest.mark.asyncio
async def test_login_sets_cookie_and_authenticates(client):
    await client.post("/users/register", data=_register_form(), files=AVATAR)
    app.dependency_overrides.pop(get_principal)

    login = await client.post("/users/login", json={"email": "CAROL@example.com", "password": "pw12345"})
    assert login.status_code == 200
    token = login.json()["data"]["access_token"]
    assert f"{settings.ACCESS_TOKEN_COOKIE}={token}" in login.headers["set-cookie"]
    assert "httponly" in login.headers["set-cookie"].lower()
    client.cookies.clear()

    via_cookie = await client.get("/users/current-user", headers={"Cookie": f"{settings.ACCESS_TOKEN_COOKIE}={token}"})
    via_bearer = await client.get("/users/current-user", headers={"Authorization": f"Bearer {token}"})
    assert via_cookie.json()["data"]["username"] == "carol"
    assert via_bearer.json()["data"]["username"] == "carol"

    anonymous = await client.get("/users/current-user", headers={"Authorization": "Bearer not-a-jwt"})
    assert anonymous.status_code == 401
    assert anonymous.json()["success"] is False


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, users):
    resp = await client.post("/users/login", json={"username": "alice", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid user credentials"


@pytest.mark.asyncio
async def test_requests_without_principal_are_401(client, auth):
    auth.logout()

    resp = await client.get("/videos")

    assert resp.status_code == 401
    assert resp.json()["statusCode"] == 401


@pytest.mark.asyncio
async def test_update_account(client, users):
    resp = await client.patch("/users/update-account", json={"full_name": "Alice Liddell"})
    conflict = await client.patch("/users/update-account", json={"email": "bob@example.com"})
    empty = await client.patch("/users/update-account", json={})

    assert resp.json()["data"]["full_name"] == "Alice Liddell"
    assert conflict.status_code == 409
    assert empty.status_code == 400


@pytest.mark.asyncio
async def test_update_avatar_replaces_previous(client, auth, storage):
    carol = (await client.post("/users/register", data=_register_form(), files=AVATAR)).json()["data"]
    auth.principal = Principal(user_id=uuid.UUID(carol["id"]), username="carol")

    resp = await client.patch("/users/avatar", files={"avatar": ("new.png", b"new-avatar", "image/png")})

    assert resp.status_code == 200
    new_avatar = resp.json()["data"]["avatar"]
    assert new_avatar != carol["avatar"]
    assert list(storage.objects) == [new_avatar.removeprefix("https://media.test/")]


@pytest.mark.asyncio
async def test_update_avatar_requires_file(client):
    resp = await client.patch("/users/avatar")

    assert resp.status_code == 400
    assert resp.json()["message"] == "Avatar file is missing"


@pytest.mark.asyncio
async def test_channel_profile(client, users):
    await client.post(f"/subscriptions/c/{users['bob'].id}")

    resp = await client.get("/users/c/BOB")
    missing = await client.get("/users/c/nobody")

    profile = resp.json()["data"]
    assert profile["username"] == "bob"
    assert profile["subscribers_count"] == 1
    assert profile["channels_subscribed_to_count"] == 0
    assert profile["is_subscribed"] is True
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_logout_clears_cookie(client):
    resp = await client.post("/users/logout")

    assert resp.status_code == 200
    assert settings.ACCESS_TOKEN_COOKIE in resp.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_password_checks_run_off_the_event_loop(client, users, monkeypatch):
    def slow_verify(password, encoded):
        time.sleep(0.3)
        return verify_password(password, encoded)

    monkeypatch.setattr(user_service, "verify_password", slow_verify)
    gaps: list[float] = []

    async def ticker():
        last = time.perf_counter()
        while True:
            await asyncio.sleep(0.01)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    task = asyncio.create_task(ticker())
    try:
        resp = await client.post("/users/login", json={"username": "alice", "password": "secret"})
    finally:
        task.cancel()

    assert resp.status_code == 200
    assert gaps and max(gaps) < 0.15


@pytest.mark.asyncio
async def test_request_log_carries_request_id(client, caplog):
    caplog.set_level(logging.INFO, logger="vidtube.main")

    resp = await client.get("/healthcheck", headers={"x-request-id": "req-42"})

    assert resp.headers["x-request-id"] == "req-42"
    lines = [r for r in caplog.records if r.name == "vidtube.main" and r.getMessage().startswith("Request:")]
    assert lines and lines[-1].request_id == "req-42"
