import uuid
from typing import Sequence
from sqlalchemy import select, update, func
from vidtube.core.repository import Repository
from vidtube.modules.videos.models import Video

class VideoRepository(Repository[Video]):
    model = Video
    label = "Video"
    sortable = {
        "createdAt": "created_at",
        "views": "views",
        "duration": "duration",
        "title": "title",
    }

    async def increment_views(self, video_id: uuid.UUID) -> Video | None:
        # single UPDATE so concurrent readers never lose an increment
        res = await self.session.execute(
            update(Video).where(Video.id == video_id).values(views=Video.views + 1)
        )
        if not res.rowcount:
            return None
        q = select(Video).where(Video.id == video_id).execution_options(populate_existing=True)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def list_for_owner(self, owner_id: uuid.UUID, *, by_views: bool = False) -> Sequence[Video]:
        return await self.list(Video.owner_id == owner_id, sort_column="views" if by_views else "created_at")

    async def total_views(self, owner_id: uuid.UUID) -> int:
        res = await self.session.execute(select(func.coalesce(func.sum(Video.views), 0)).where(Video.owner_id == owner_id))
        return int(res.scalar_one())
