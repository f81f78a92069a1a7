import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.paging import PageParams
from vidtube.core.security import Principal
from vidtube.modules.likes.repository import LikeRepository
from vidtube.modules.tweets.models import Tweet
from vidtube.modules.tweets.repository import TweetRepository

class TweetService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = TweetRepository(session)

    async def create(self, principal: Principal, content: str | None) -> tuple[Tweet | None, Failure | None]:
        content = (content or "").strip()
        if not content:
            return None, Failure.validation("Tweet content is required")
        obj = await self.repo.create(content=content, owner_id=principal.user_id)
        await self.session.commit()
        return obj, None

    async def list_for_user(self, user_id: uuid.UUID, page: PageParams) -> Sequence[Tweet]:
        return await self.repo.list(Tweet.owner_id == user_id, page=page)

    async def update(self, principal: Principal, tweet_id: uuid.UUID, content: str | None) -> tuple[Tweet | None, Failure | None]:
        content = (content or "").strip()
        if not content:
            return None, Failure.validation("Updated content is required")
        obj, err = await self.repo.get_owned(tweet_id, principal)
        if err:
            return None, err
        await self.repo.update(obj, content=content)
        await self.session.commit()
        return obj, None

    async def delete(self, principal: Principal, tweet_id: uuid.UUID) -> tuple[bool, Failure | None]:
        obj, err = await self.repo.get_owned(tweet_id, principal)
        if err:
            return False, err
        await LikeRepository(self.session).delete_for_subjects("tweet", [obj.id])
        await self.repo.delete(obj)
        await self.session.commit()
        return True, None
