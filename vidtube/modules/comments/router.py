import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.paging import PageParams, page_params
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.comments.schemas import CommentIn, CommentOut
from vidtube.modules.comments.service import CommentService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> CommentService:
    return CommentService(session)

@router.get("/{video_id}", response_model=ApiResponse[list[CommentOut]])
async def get_video_comments(
    video_id: uuid.UUID,
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(get_principal),
    service: CommentService = Depends(svc),
):
    comments = await service.list_for_video(video_id, page)
    return ok([CommentOut.model_validate(c) for c in comments], "Comments fetched successfully")

@router.post("/{video_id}", status_code=201, response_model=ApiResponse[CommentOut])
async def add_comment(
    video_id: uuid.UUID,
    payload: CommentIn,
    principal: Principal = Depends(get_principal),
    service: CommentService = Depends(svc),
):
    obj, err = await service.add(principal, video_id, payload.content)
    raise_for(err)
    return ok(CommentOut.model_validate(obj), "Comment added successfully", 201)

@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentOut])
async def update_comment(
    comment_id: uuid.UUID,
    payload: CommentIn,
    principal: Principal = Depends(get_principal),
    service: CommentService = Depends(svc),
):
    obj, err = await service.update(principal, comment_id, payload.content)
    raise_for(err)
    return ok(CommentOut.model_validate(obj), "Comment updated successfully")

@router.delete("/c/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(
    comment_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: CommentService = Depends(svc),
):
    _, err = await service.delete(principal, comment_id)
    raise_for(err)
    return ok(None, "Comment deleted successfully")
