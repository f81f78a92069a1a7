from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.security import Principal
from vidtube.modules.dashboard.schemas import ChannelStatsOut
from vidtube.modules.likes.repository import LikeRepository
from vidtube.modules.subscriptions.models import Subscription
from vidtube.modules.subscriptions.repository import SubscriptionRepository
from vidtube.modules.users.repository import UserRepository
from vidtube.modules.videos.models import Video
from vidtube.modules.videos.repository import VideoRepository
from vidtube.modules.videos.schemas import VideoOut

class DashboardService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.videos = VideoRepository(session)

    async def channel_stats(self, principal: Principal) -> tuple[ChannelStatsOut | None, Failure | None]:
        user, err = await UserRepository(self.session).get_or_fail(principal.user_id)
        if err:
            return None, err
        videos = await self.videos.list_for_owner(user.id, by_views=True)
        total_likes = await LikeRepository(self.session).count_for_subjects("video", [v.id for v in videos])
        total_subscribers = await SubscriptionRepository(self.session).count(Subscription.channel_id == user.id)
        return ChannelStatsOut(
            total_videos=len(videos),
            total_views=await self.videos.total_views(user.id),
            total_likes=total_likes,
            total_subscribers=total_subscribers,
            channel_name=user.username,
            avatar=user.avatar,
            most_viewed_video=VideoOut.model_validate(videos[0]) if videos else None,
        ), None

    async def channel_videos(self, principal: Principal) -> Sequence[Video]:
        return await self.videos.list_for_owner(principal.user_id)
