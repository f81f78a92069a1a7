import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.likes.schemas import LikeOut, ToggleOut
from vidtube.modules.likes.service import LikeService
from vidtube.modules.videos.schemas import VideoOut

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> LikeService:
    return LikeService(session)

async def _toggle(service: LikeService, principal: Principal, subject_type: str, subject_id: uuid.UUID):
    result, err = await service.toggle(principal, subject_type, subject_id)
    raise_for(err)
    added, obj = result
    data = ToggleOut(liked=added, like=LikeOut.model_validate(obj) if obj else None)
    return ok(data, "Liked" if added else "Like removed")

@router.post("/toggle/v/{video_id}", response_model=ApiResponse[ToggleOut])
async def toggle_video_like(video_id: uuid.UUID, principal: Principal = Depends(get_principal), service: LikeService = Depends(svc)):
    return await _toggle(service, principal, "video", video_id)

@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[ToggleOut])
async def toggle_comment_like(comment_id: uuid.UUID, principal: Principal = Depends(get_principal), service: LikeService = Depends(svc)):
    return await _toggle(service, principal, "comment", comment_id)

@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[ToggleOut])
async def toggle_tweet_like(tweet_id: uuid.UUID, principal: Principal = Depends(get_principal), service: LikeService = Depends(svc)):
    return await _toggle(service, principal, "tweet", tweet_id)

@router.get("/videos", response_model=ApiResponse[list[VideoOut]])
async def get_liked_videos(principal: Principal = Depends(get_principal), service: LikeService = Depends(svc)):
    videos = await service.liked_videos(principal)
    return ok([VideoOut.model_validate(v) for v in videos], "Liked videos fetched successfully")
