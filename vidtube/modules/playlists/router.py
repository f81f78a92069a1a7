import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.playlists.schemas import PlaylistCreate, PlaylistUpdate, PlaylistOut, PlaylistDetailOut
from vidtube.modules.playlists.service import PlaylistService
from vidtube.modules.videos.schemas import VideoOut

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> PlaylistService:
    return PlaylistService(session)

def _detail(playlist, videos) -> PlaylistDetailOut:
    out = PlaylistDetailOut.model_validate(playlist, from_attributes=True)
    out.videos = [VideoOut.model_validate(v) for v in videos]
    return out

@router.post("", status_code=201, response_model=ApiResponse[PlaylistOut])
async def create_playlist(
    payload: PlaylistCreate,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    obj, err = await service.create(principal, payload)
    raise_for(err)
    return ok(PlaylistOut.model_validate(obj), "Playlist created successfully", 201)

@router.get("/user/{user_id}", response_model=ApiResponse[list[PlaylistOut]])
async def get_user_playlists(
    user_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    playlists, err = await service.list_for_user(user_id)
    raise_for(err)
    return ok([PlaylistOut.model_validate(p) for p in playlists], "User playlists retrieved successfully")

@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetailOut])
async def get_playlist(
    playlist_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    result, err = await service.get(playlist_id)
    raise_for(err)
    return ok(_detail(*result), "Playlist retrieved successfully")

@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistOut])
async def update_playlist(
    playlist_id: uuid.UUID,
    payload: PlaylistUpdate,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    obj, err = await service.update(principal, playlist_id, payload)
    raise_for(err)
    return ok(PlaylistOut.model_validate(obj), "Playlist updated successfully")

@router.delete("/{playlist_id}", response_model=ApiResponse[None])
async def delete_playlist(
    playlist_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    _, err = await service.delete(principal, playlist_id)
    raise_for(err)
    return ok(None, "Playlist deleted successfully")

@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetailOut])
async def add_video_to_playlist(
    video_id: uuid.UUID,
    playlist_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    result, err = await service.add_video(principal, playlist_id, video_id)
    raise_for(err)
    return ok(_detail(*result), "Video added to playlist successfully")

@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetailOut])
async def remove_video_from_playlist(
    video_id: uuid.UUID,
    playlist_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: PlaylistService = Depends(svc),
):
    result, err = await service.remove_video(principal, playlist_id, video_id)
    raise_for(err)
    return ok(_detail(*result), "Video removed from playlist successfully")
