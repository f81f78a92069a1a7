import pytest


@pytest.mark.asyncio
async def test_channel_stats(client, publish, auth, users):
    quiet = (await publish(title="quiet")).json()["data"]
    popular = (await publish(title="popular")).json()["data"]
    await client.get(f"/videos/{popular['id']}")
    await client.get(f"/videos/{popular['id']}")
    await client.get(f"/videos/{quiet['id']}")
    await client.post(f"/likes/toggle/v/{popular['id']}")

    auth.login_as(users["bob"])
    await client.post(f"/subscriptions/c/{users['alice'].id}")
    await client.post(f"/likes/toggle/v/{quiet['id']}")
    auth.login_as(users["alice"])

    resp = await client.get("/dashboard/stats")

    assert resp.status_code == 200
    stats = resp.json()["data"]
    assert stats["total_videos"] == 2
    assert stats["total_views"] == 3
    assert stats["total_likes"] == 2
    assert stats["total_subscribers"] == 1
    assert stats["channel_name"] == "alice"
    assert stats["avatar"] == users["alice"].avatar
    assert stats["most_viewed_video"]["id"] == popular["id"]


@pytest.mark.asyncio
async def test_empty_channel_stats(client):
    stats = (await client.get("/dashboard/stats")).json()["data"]

    assert stats["total_videos"] == 0
    assert stats["total_views"] == 0
    assert stats["most_viewed_video"] is None


@pytest.mark.asyncio
async def test_channel_videos_only_lists_own(client, publish, auth, users):
    await publish(title="alice's")
    auth.login_as(users["bob"])
    await publish(title="bob's")

    resp = await client.get("/dashboard/videos")

    assert [v["title"] for v in resp.json()["data"]] == ["bob's"]


@pytest.mark.asyncio
async def test_healthcheck_envelope(client):
    resp = await client.get("/healthcheck")

    assert resp.status_code == 200
    assert resp.json() == {
        "statusCode": 200,
        "data": {"status": "ok"},
        "message": "Health check passed",
        "success": True,
    }


@pytest.mark.asyncio
async def test_unknown_route_uses_failure_envelope(client):
    resp = await client.get("/nope")

    assert resp.status_code == 404
    assert resp.json() == {"statusCode": 404, "message": "Not Found", "errorDetails": [], "success": False}
