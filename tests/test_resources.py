import pytest


@pytest.mark.asyncio
async def test_comment_lifecycle(client, publish, auth, users):
    video_id = (await publish()).json()["data"]["id"]

    created = await client.post(f"/comments/{video_id}", json={"content": "  first!  "})
    assert created.status_code == 201
    comment = created.json()["data"]
    assert comment["content"] == "first!"
    assert comment["owner_id"] == str(users["alice"].id)

    updated = await client.patch(f"/comments/c/{comment['id']}", json={"content": "edited"})
    assert updated.json()["data"]["content"] == "edited"

    auth.login_as(users["bob"])
    assert (await client.patch(f"/comments/c/{comment['id']}", json={"content": "hijack"})).status_code == 403
    assert (await client.delete(f"/comments/c/{comment['id']}")).status_code == 403
    listed = (await client.get(f"/comments/{video_id}")).json()["data"]
    assert [c["content"] for c in listed] == ["edited"]

    auth.login_as(users["alice"])
    assert (await client.delete(f"/comments/c/{comment['id']}")).status_code == 200
    assert (await client.get(f"/comments/{video_id}")).json()["data"] == []


@pytest.mark.asyncio
async def test_comment_validation(client, publish):
    video_id = (await publish()).json()["data"]["id"]

    empty = await client.post(f"/comments/{video_id}", json={"content": "   "})
    orphan = await client.post("/comments/00000000-0000-0000-0000-000000000000", json={"content": "hi"})

    assert empty.status_code == 400
    assert orphan.status_code == 404


@pytest.mark.asyncio
async def test_comments_are_paginated_newest_first(client, publish):
    video_id = (await publish()).json()["data"]["id"]
    for i in range(3):
        await client.post(f"/comments/{video_id}", json={"content": f"c{i}"})

    page = await client.get(f"/comments/{video_id}", params={"page": 1, "limit": 2})

    assert [c["content"] for c in page.json()["data"]] == ["c2", "c1"]


@pytest.mark.asyncio
async def test_tweet_lifecycle(client, auth, users):
    created = await client.post("/tweets", json={"content": "  hello world "})
    assert created.status_code == 201
    tweet = created.json()["data"]
    assert tweet["content"] == "hello world"

    listed = await client.get(f"/tweets/user/{users['alice'].id}")
    assert [t["id"] for t in listed.json()["data"]] == [tweet["id"]]

    blank = await client.patch(f"/tweets/{tweet['id']}", json={"content": ""})
    assert blank.status_code == 400
    assert blank.json()["message"] == "Updated content is required"

    auth.login_as(users["bob"])
    assert (await client.patch(f"/tweets/{tweet['id']}", json={"content": "mine now"})).status_code == 403
    assert (await client.delete(f"/tweets/{tweet['id']}")).status_code == 403

    auth.login_as(users["alice"])
    updated = await client.patch(f"/tweets/{tweet['id']}", json={"content": "edited"})
    assert updated.json()["data"]["content"] == "edited"
    assert (await client.delete(f"/tweets/{tweet['id']}")).status_code == 200
    assert (await client.get(f"/tweets/user/{users['alice'].id}")).json()["data"] == []


@pytest.mark.asyncio
async def test_tweet_requires_content(client):
    resp = await client.post("/tweets", json={})

    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_playlist_lifecycle(client, publish, auth, users):
    video_id = (await publish()).json()["data"]["id"]

    created = await client.post("/playlists", json={"name": "Favourites", "description": "best of"})
    assert created.status_code == 201
    playlist_id = created.json()["data"]["id"]

    added = await client.patch(f"/playlists/add/{video_id}/{playlist_id}")
    again = await client.patch(f"/playlists/add/{video_id}/{playlist_id}")
    assert [v["id"] for v in added.json()["data"]["videos"]] == [video_id]
    assert [v["id"] for v in again.json()["data"]["videos"]] == [video_id]

    fetched = await client.get(f"/playlists/{playlist_id}")
    assert fetched.json()["data"]["name"] == "Favourites"
    assert len(fetched.json()["data"]["videos"]) == 1

    renamed = await client.patch(f"/playlists/{playlist_id}", json={"name": "Top"})
    assert renamed.json()["data"]["name"] == "Top"
    assert renamed.json()["data"]["description"] == "best of"

    removed = await client.patch(f"/playlists/remove/{video_id}/{playlist_id}")
    assert removed.json()["data"]["videos"] == []

    mine = await client.get(f"/playlists/user/{users['alice'].id}")
    assert [p["id"] for p in mine.json()["data"]] == [playlist_id]

    auth.login_as(users["bob"])
    assert (await client.patch(f"/playlists/add/{video_id}/{playlist_id}")).status_code == 403
    assert (await client.delete(f"/playlists/{playlist_id}")).status_code == 403

    auth.login_as(users["alice"])
    assert (await client.delete(f"/playlists/{playlist_id}")).status_code == 200
    assert (await client.get(f"/playlists/{playlist_id}")).status_code == 404


@pytest.mark.asyncio
async def test_playlist_validation(client):
    created = await client.post("/playlists", json={"name": " "})
    assert created.status_code == 400

    playlist_id = (await client.post("/playlists", json={"name": "Later"})).json()["data"]["id"]
    empty_update = await client.patch(f"/playlists/{playlist_id}", json={})
    missing_video = await client.patch(f"/playlists/add/00000000-0000-0000-0000-000000000000/{playlist_id}")

    assert empty_update.status_code == 400
    assert empty_update.json()["message"] == "At least one field (name or description) is required for update"
    assert missing_video.status_code == 404
