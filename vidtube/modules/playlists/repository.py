import uuid
from typing import Sequence
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from vidtube.core.repository import Repository
from vidtube.modules.playlists.models import Playlist, PlaylistVideo
from vidtube.modules.videos.models import Video

class PlaylistRepository(Repository[Playlist]):
    model = Playlist
    label = "Playlist"

    async def videos_of(self, playlist_id: uuid.UUID) -> Sequence[Video]:
        q = (
            select(Video)
            .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .where(PlaylistVideo.playlist_id == playlist_id)
            .order_by(PlaylistVideo.created_at.asc())
        )
        res = await self.session.execute(q)
        return res.scalars().all()

    async def add_video(self, playlist_id: uuid.UUID, video_id: uuid.UUID) -> bool:
        """Set-add; False when the video was already in the playlist."""
        res = await self.session.execute(
            select(PlaylistVideo.id).where(PlaylistVideo.playlist_id == playlist_id, PlaylistVideo.video_id == video_id)
        )
        if res.first() is not None:
            return False
        try:
            self.session.add(PlaylistVideo(playlist_id=playlist_id, video_id=video_id))
            await self.session.flush()
        except IntegrityError:
            # concurrent add of the same pair
            await self.session.rollback()
            return False
        return True

    async def remove_video(self, playlist_id: uuid.UUID, video_id: uuid.UUID) -> bool:
        removed = await self._delete_entries(PlaylistVideo.playlist_id == playlist_id, PlaylistVideo.video_id == video_id)
        return removed > 0

    async def clear(self, playlist_id: uuid.UUID) -> int:
        return await self._delete_entries(PlaylistVideo.playlist_id == playlist_id)

    async def drop_video_everywhere(self, video_id: uuid.UUID) -> int:
        return await self._delete_entries(PlaylistVideo.video_id == video_id)

    async def _delete_entries(self, *filters) -> int:
        res = await self.session.execute(delete(PlaylistVideo).where(*filters))
        return res.rowcount or 0
