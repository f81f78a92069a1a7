import logging
import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.repository import Repository
from vidtube.core.security import Principal
from vidtube.modules.comments.repository import CommentRepository
from vidtube.modules.likes.models import Like
from vidtube.modules.likes.repository import LikeRepository
from vidtube.modules.tweets.repository import TweetRepository
from vidtube.modules.videos.models import Video
from vidtube.modules.videos.repository import VideoRepository

logger = logging.getLogger(__name__)

_SUBJECTS: dict[str, type[Repository]] = {
    "video": VideoRepository,
    "comment": CommentRepository,
    "tweet": TweetRepository,
}

class LikeService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = LikeRepository(session)

    async def toggle(self, principal: Principal, subject_type: str, subject_id: uuid.UUID) -> tuple[tuple[bool, Like | None] | None, Failure | None]:
        subject_repo = _SUBJECTS[subject_type](self.session)
        _, err = await subject_repo.get_or_fail(subject_id)
        if err:
            return None, err
        added, obj = await self.repo.toggle(subject_type=subject_type, subject_id=subject_id, liked_by=principal.user_id)
        await self.session.commit()
        logger.debug(f"Like {subject_type}:{subject_id} by {principal.user_id} -> {'added' if added else 'removed'}")
        return (added, obj), None

    async def liked_videos(self, principal: Principal) -> Sequence[Video]:
        return await self.repo.liked_videos(principal.user_id)
