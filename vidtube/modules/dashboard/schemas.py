from pydantic import BaseModel
from vidtube.modules.videos.schemas import VideoOut

class ChannelStatsOut(BaseModel):
    total_videos: int
    total_views: int
    total_likes: int
    total_subscribers: int
    channel_name: str
    avatar: str | None
    most_viewed_video: VideoOut | None
