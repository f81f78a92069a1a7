import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.paging import PageParams
from vidtube.core.security import Principal
from vidtube.modules.comments.models import Comment
from vidtube.modules.comments.repository import CommentRepository
from vidtube.modules.likes.repository import LikeRepository
from vidtube.modules.videos.repository import VideoRepository

class CommentService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = CommentRepository(session)

    async def list_for_video(self, video_id: uuid.UUID, page: PageParams) -> Sequence[Comment]:
        return await self.repo.list(Comment.video_id == video_id, page=page)

    async def add(self, principal: Principal, video_id: uuid.UUID, content: str | None) -> tuple[Comment | None, Failure | None]:
        content = (content or "").strip()
        if not content:
            return None, Failure.validation("Comment content is required")
        _, err = await VideoRepository(self.session).get_or_fail(video_id)
        if err:
            return None, err
        obj = await self.repo.create(content=content, video_id=video_id, owner_id=principal.user_id)
        await self.session.commit()
        return obj, None

    async def update(self, principal: Principal, comment_id: uuid.UUID, content: str | None) -> tuple[Comment | None, Failure | None]:
        content = (content or "").strip()
        if not content:
            return None, Failure.validation("Comment content is required")
        obj, err = await self.repo.get_owned(comment_id, principal)
        if err:
            return None, err
        await self.repo.update(obj, content=content)
        await self.session.commit()
        return obj, None

    async def delete(self, principal: Principal, comment_id: uuid.UUID) -> tuple[bool, Failure | None]:
        obj, err = await self.repo.get_owned(comment_id, principal)
        if err:
            return False, err
        await LikeRepository(self.session).delete_for_subjects("comment", [obj.id])
        await self.repo.delete(obj)
        await self.session.commit()
        return True, None
