import uuid
from typing import Sequence
from sqlalchemy import select
from vidtube.core.repository import ToggleRepository
from vidtube.modules.likes.models import Like
from vidtube.modules.videos.models import Video

class LikeRepository(ToggleRepository[Like]):
    model = Like
    label = "Like"

    async def liked_videos(self, user_id: uuid.UUID) -> Sequence[Video]:
        q = (
            select(Video)
            .join(Like, (Like.subject_id == Video.id) & (Like.subject_type == "video"))
            .where(Like.liked_by == user_id)
            .order_by(Like.created_at.desc())
        )
        res = await self.session.execute(q)
        return res.scalars().all()

    async def count_for_subjects(self, subject_type: str, subject_ids: Sequence[uuid.UUID]) -> int:
        if not subject_ids:
            return 0
        return await self.count(Like.subject_type == subject_type, Like.subject_id.in_(subject_ids))

    async def delete_for_subjects(self, subject_type: str, subject_ids: Sequence[uuid.UUID]) -> int:
        if not subject_ids:
            return 0
        return await self.delete_where(Like.subject_type == subject_type, Like.subject_id.in_(subject_ids))
