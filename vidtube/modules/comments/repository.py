import uuid
from typing import Sequence
from sqlalchemy import select
from vidtube.core.repository import Repository
from vidtube.modules.comments.models import Comment

class CommentRepository(Repository[Comment]):
    model = Comment
    label = "Comment"

    async def ids_for_video(self, video_id: uuid.UUID) -> Sequence[uuid.UUID]:
        res = await self.session.execute(select(Comment.id).where(Comment.video_id == video_id))
        return res.scalars().all()
