import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.security import Principal
from vidtube.modules.playlists.models import Playlist
from vidtube.modules.playlists.repository import PlaylistRepository
from vidtube.modules.playlists.schemas import PlaylistCreate, PlaylistUpdate
from vidtube.modules.users.repository import UserRepository
from vidtube.modules.videos.models import Video
from vidtube.modules.videos.repository import VideoRepository

class PlaylistService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = PlaylistRepository(session)

    async def create(self, principal: Principal, payload: PlaylistCreate) -> tuple[Playlist | None, Failure | None]:
        name = (payload.name or "").strip()
        if not name:
            return None, Failure.validation("Playlist name is required")
        obj = await self.repo.create(name=name, description=payload.description, owner_id=principal.user_id)
        await self.session.commit()
        return obj, None

    async def list_for_user(self, user_id: uuid.UUID) -> tuple[Sequence[Playlist] | None, Failure | None]:
        _, err = await UserRepository(self.session).get_or_fail(user_id)
        if err:
            return None, err
        return await self.repo.list(Playlist.owner_id == user_id), None

    async def get(self, playlist_id: uuid.UUID) -> tuple[tuple[Playlist, Sequence[Video]] | None, Failure | None]:
        obj, err = await self.repo.get_or_fail(playlist_id)
        if err:
            return None, err
        return (obj, await self.repo.videos_of(obj.id)), None

    async def update(self, principal: Principal, playlist_id: uuid.UUID, payload: PlaylistUpdate) -> tuple[Playlist | None, Failure | None]:
        name = payload.name.strip() if payload.name is not None else None
        if not name and not payload.description:
            return None, Failure.validation("At least one field (name or description) is required for update")
        obj, err = await self.repo.get_owned(playlist_id, principal)
        if err:
            return None, err
        await self.repo.update(obj, name=name or None, description=payload.description)
        await self.session.commit()
        return obj, None

    async def delete(self, principal: Principal, playlist_id: uuid.UUID) -> tuple[bool, Failure | None]:
        obj, err = await self.repo.get_owned(playlist_id, principal)
        if err:
            return False, err
        await self.repo.clear(obj.id)
        await self.repo.delete(obj)
        await self.session.commit()
        return True, None

    async def add_video(self, principal: Principal, playlist_id: uuid.UUID, video_id: uuid.UUID) -> tuple[tuple[Playlist, Sequence[Video]] | None, Failure | None]:
        obj, err = await self.repo.get_owned(playlist_id, principal)
        if err:
            return None, err
        _, err = await VideoRepository(self.session).get_or_fail(video_id)
        if err:
            return None, err
        if not await self.repo.add_video(obj.id, video_id):
            # already present; a lost insert race may have expired obj
            await self.session.refresh(obj)
        await self.session.commit()
        return (obj, await self.repo.videos_of(obj.id)), None

    async def remove_video(self, principal: Principal, playlist_id: uuid.UUID, video_id: uuid.UUID) -> tuple[tuple[Playlist, Sequence[Video]] | None, Failure | None]:
        obj, err = await self.repo.get_owned(playlist_id, principal)
        if err:
            return None, err
        await self.repo.remove_video(obj.id, video_id)
        await self.session.commit()
        return (obj, await self.repo.videos_of(obj.id)), None
