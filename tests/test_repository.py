import pytest

from vidtube.core.errors import ErrorKind
from vidtube.core.paging import PageParams
from vidtube.core.security import Principal
from vidtube.modules.videos.models import Video
from vidtube.modules.videos.repository import VideoRepository


async def _seed_videos(session, owner_id, count):
    repo = VideoRepository(session)
    for i in range(1, count + 1):
        await repo.create(
            owner_id=owner_id,
            video_file=f"https://media.test/video/upload/v{i}.mp4",
            thumbnail=f"https://media.test/image/upload/t{i}.png",
            title=f"video-{i:02d}",
            description="d",
            duration=float(i),
            views=i * 3,
        )
    await session.commit()
    return repo


@pytest.mark.asyncio
async def test_offset_pagination(session, users):
    repo = await _seed_videos(session, users["alice"].id, 25)

    page2 = await repo.list(page=PageParams(page=2, limit=10), sort_column="title", descending=False)
    page3 = await repo.list(page=PageParams(page=3, limit=10), sort_column="title", descending=False)

    assert [v.title for v in page2] == [f"video-{i:02d}" for i in range(11, 21)]
    assert [v.title for v in page3] == [f"video-{i:02d}" for i in range(21, 26)]


@pytest.mark.asyncio
async def test_pagination_over_http(client, session, users):
    await _seed_videos(session, users["alice"].id, 25)

    resp = await client.get("/videos", params={"page": 3, "limit": 10, "sortBy": "views", "sortType": "desc"})

    assert [v["views"] for v in resp.json()["data"]] == [15, 12, 9, 6, 3]


@pytest.mark.asyncio
async def test_page_bounds_are_validated(client):
    assert (await client.get("/videos", params={"page": 0})).status_code == 400
    assert (await client.get("/videos", params={"limit": 1000})).status_code == 400


@pytest.mark.asyncio
async def test_resolve_sort_whitelist(session):
    repo = VideoRepository(session)

    assert repo.resolve_sort(None) == ("created_at", None)
    assert repo.resolve_sort("createdAt") == ("created_at", None)
    column, err = repo.resolve_sort("password_hash")
    assert column is None
    assert err.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_get_owned_checks_owner(session, users):
    repo = await _seed_videos(session, users["alice"].id, 1)
    video = (await repo.list())[0]

    owned, err = await repo.get_owned(video.id, Principal(user_id=users["alice"].id, username="alice"))
    assert owned is video and err is None

    denied, err = await repo.get_owned(video.id, Principal(user_id=users["bob"].id, username="bob"))
    assert denied is None
    assert err.kind is ErrorKind.FORBIDDEN
    assert err.status_code == 403


@pytest.mark.asyncio
async def test_increment_views_is_a_single_update(session, users):
    repo = await _seed_videos(session, users["alice"].id, 1)
    video = (await repo.list())[0]

    await repo.increment_views(video.id)
    await repo.increment_views(video.id)
    await session.commit()

    assert (await repo.get(video.id)).views == 5
    assert await repo.count(Video.owner_id == users["alice"].id) == 1
    assert await repo.total_views(users["alice"].id) == 5
