"""Video publication workflow.

Publishing uploads the thumbnail, then the video, and only then writes the
record. Any upload that succeeded in a call which ultimately fails is
removed from the object store again before the failure is returned. Staged
files are discarded on every path.
"""

import logging
import uuid
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import Failure
from vidtube.core.paging import PageParams
from vidtube.core.security import Principal
from vidtube.modules.comments.repository import CommentRepository
from vidtube.modules.likes.repository import LikeRepository
from vidtube.modules.playlists.repository import PlaylistRepository
from vidtube.modules.videos.models import Video
from vidtube.modules.videos.repository import VideoRepository
from vidtube.platform.media_gateway import MediaGateway, MediaKind, UploadResult
from vidtube.platform.staging import StagedFile

logger = logging.getLogger(__name__)


def _discard(*staged: StagedFile | None) -> None:
    for s in staged:
        if s is not None:
            s.discard()


def _clean(value: str | None) -> str:
    return (value or "").strip()


class VideoService:
    def __init__(self, session: AsyncSession, gateway: MediaGateway):
        self.session = session
        self.gateway = gateway
        self.repo = VideoRepository(session)

    async def list(
        self,
        page: PageParams,
        *,
        query: str | None = None,
        sort_by: str | None = None,
        sort_type: str = "desc",
        user_id: uuid.UUID | None = None,
    ) -> tuple[Sequence[Video] | None, Failure | None]:
        if sort_type not in ("asc", "desc"):
            return None, Failure.validation("sortType must be 'asc' or 'desc'")
        column, err = self.repo.resolve_sort(sort_by)
        if err:
            return None, err
        filters = []
        if query:
            filters.append(Video.title.icontains(query.strip(), autoescape=True))
        if user_id:
            filters.append(Video.owner_id == user_id)
        videos = await self.repo.list(*filters, page=page, sort_column=column, descending=sort_type == "desc")
        return videos, None

    async def publish(
        self,
        principal: Principal,
        *,
        title: str | None,
        description: str | None,
        video_file: StagedFile | None,
        thumbnail: StagedFile | None,
    ) -> tuple[Video | None, Failure | None]:
        try:
            title, description = _clean(title), _clean(description)
            if not title or not description:
                return None, Failure.validation("Title and description are required")
            if video_file is None or not video_file.exists():
                return None, Failure.validation("No video file found")
            if thumbnail is None or not thumbnail.exists():
                return None, Failure.validation("No thumbnail found")

            uploaded: list[UploadResult] = []
            thumb, err = await self.gateway.upload(thumbnail, MediaKind.IMAGE)
            if err:
                return None, err
            uploaded.append(thumb)

            video, err = await self.gateway.upload(video_file, MediaKind.VIDEO)
            if err:
                await self.gateway.rollback(uploaded)
                return None, err
            uploaded.append(video)

            if not video.duration_seconds:
                await self.gateway.rollback(uploaded)
                return None, Failure.upstream("Could not determine video duration")

            try:
                obj = await self.repo.create(
                    owner_id=principal.user_id,
                    video_file=video.external_ref,
                    thumbnail=thumb.external_ref,
                    title=title,
                    description=description,
                    duration=video.duration_seconds,
                )
                await self.session.commit()
            except SQLAlchemyError as e:
                await self.session.rollback()
                await self.gateway.rollback(uploaded)
                return None, Failure.upstream("Failed to save video", cause=e)

            logger.info(f"Video {obj.id} published by {principal.user_id} ({obj.duration:.1f}s)")
            return obj, None
        finally:
            _discard(video_file, thumbnail)

    async def get(self, video_id: uuid.UUID) -> tuple[Video | None, Failure | None]:
        obj = await self.repo.increment_views(video_id)
        if obj is None:
            return None, Failure.not_found("Video not found")
        await self.session.commit()
        return obj, None

    async def update(
        self,
        principal: Principal,
        video_id: uuid.UUID,
        *,
        title: str | None,
        description: str | None,
        thumbnail: StagedFile | None = None,
    ) -> tuple[Video | None, Failure | None]:
        try:
            title, description = _clean(title), _clean(description)
            if not title or not description:
                return None, Failure.validation("Title and description are required")

            obj, err = await self.repo.get_owned(video_id, principal)
            if err:
                return None, err

            new_thumb = None
            if thumbnail is not None:
                new_thumb, err = await self.gateway.upload(thumbnail, MediaKind.IMAGE)
                if err:
                    return None, err

            old_thumbnail = obj.thumbnail
            try:
                await self.repo.update(
                    obj,
                    title=title,
                    description=description,
                    thumbnail=new_thumb.external_ref if new_thumb else None,
                )
                await self.session.commit()
            except SQLAlchemyError as e:
                await self.session.rollback()
                if new_thumb:
                    await self.gateway.rollback([new_thumb])
                return None, Failure.upstream("Failed to update video", cause=e)

            if new_thumb:
                _, err = await self.gateway.delete(old_thumbnail, MediaKind.IMAGE)
                if err:
                    logger.warning(f"Superseded thumbnail {old_thumbnail} not removed: {err.message}")
            return obj, None
        finally:
            _discard(thumbnail)

    async def delete(self, principal: Principal, video_id: uuid.UUID) -> tuple[bool, Failure | None]:
        obj, err = await self.repo.get_owned(video_id, principal)
        if err:
            return False, err

        # the record is only removed once the stored video is gone
        _, err = await self.gateway.delete(obj.video_file, MediaKind.VIDEO)
        if err:
            return False, err

        thumbnail = obj.thumbnail
        try:
            comments = CommentRepository(self.session)
            likes = LikeRepository(self.session)
            comment_ids = await comments.ids_for_video(obj.id)
            await likes.delete_for_subjects("comment", comment_ids)
            await likes.delete_for_subjects("video", [obj.id])
            await comments.delete_where(comments.model.video_id == obj.id)
            await PlaylistRepository(self.session).drop_video_everywhere(obj.id)
            await self.repo.delete(obj)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Video {video_id} removed from storage but its record could not be deleted")
            return False, Failure.upstream("Video deletion failed", cause=e)

        _, err = await self.gateway.delete(thumbnail, MediaKind.IMAGE)
        if err:
            logger.warning(f"Thumbnail {thumbnail} of deleted video {video_id} not removed: {err.message}")
        return True, None

    async def toggle_publish(self, principal: Principal, video_id: uuid.UUID) -> tuple[Video | None, Failure | None]:
        obj, err = await self.repo.get_owned(video_id, principal)
        if err:
            return None, err
        obj.is_published = not obj.is_published
        await self.session.commit()
        return obj, None
