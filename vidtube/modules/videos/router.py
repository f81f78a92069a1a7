import uuid
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.paging import PageParams, page_params
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.videos.schemas import VideoOut
from vidtube.modules.videos.service import VideoService
from vidtube.platform.media_gateway import MediaGateway
from vidtube.platform.provider_registry import get_media_gateway
from vidtube.platform.staging import StagingArea

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session), gateway: MediaGateway = Depends(get_media_gateway)) -> VideoService:
    return VideoService(session, gateway)

@router.get("", response_model=ApiResponse[list[VideoOut]])
async def list_videos(
    page: PageParams = Depends(page_params),
    query: str | None = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_type: str = Query("desc", alias="sortType"),
    user_id: uuid.UUID | None = Query(None, alias="userId"),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    videos, err = await service.list(page, query=query, sort_by=sort_by, sort_type=sort_type, user_id=user_id)
    raise_for(err)
    return ok([VideoOut.model_validate(v) for v in videos], "Videos retrieved successfully")

@router.post("", status_code=201, response_model=ApiResponse[VideoOut])
async def publish_video(
    title: str | None = Form(None),
    description: str | None = Form(None),
    video_file: UploadFile | None = File(None, alias="videoFile"),
    thumbnail: UploadFile | None = File(None),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    async with StagingArea() as staging:
        staged_video = await staging.stage(video_file)
        staged_thumbnail = await staging.stage(thumbnail)
        obj, err = await service.publish(
            principal,
            title=title,
            description=description,
            video_file=staged_video,
            thumbnail=staged_thumbnail,
        )
    raise_for(err)
    return ok(VideoOut.model_validate(obj), "Video published successfully", 201)

@router.get("/{video_id}", response_model=ApiResponse[VideoOut])
async def get_video(
    video_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    obj, err = await service.get(video_id)
    raise_for(err)
    return ok(VideoOut.model_validate(obj), "Video retrieved successfully")

@router.patch("/{video_id}", response_model=ApiResponse[VideoOut])
async def update_video(
    video_id: uuid.UUID,
    title: str | None = Form(None),
    description: str | None = Form(None),
    thumbnail: UploadFile | None = File(None),
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    async with StagingArea() as staging:
        staged_thumbnail = await staging.stage(thumbnail)
        obj, err = await service.update(
            principal, video_id, title=title, description=description, thumbnail=staged_thumbnail
        )
    raise_for(err)
    return ok(VideoOut.model_validate(obj), "Video updated successfully")

@router.delete("/{video_id}", response_model=ApiResponse[None])
async def delete_video(
    video_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    _, err = await service.delete(principal, video_id)
    raise_for(err)
    return ok(None, "Video deleted successfully")

@router.patch("/{video_id}/toggle-publish", response_model=ApiResponse[VideoOut])
async def toggle_publish_status(
    video_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: VideoService = Depends(svc),
):
    obj, err = await service.toggle_publish(principal, video_id)
    raise_for(err)
    return ok(VideoOut.model_validate(obj), "Publish status toggled successfully")
