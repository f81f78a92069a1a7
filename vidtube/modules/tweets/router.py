import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.paging import PageParams, page_params
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.tweets.schemas import TweetIn, TweetOut
from vidtube.modules.tweets.service import TweetService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> TweetService:
    return TweetService(session)

@router.post("", status_code=201, response_model=ApiResponse[TweetOut])
async def create_tweet(
    payload: TweetIn,
    principal: Principal = Depends(get_principal),
    service: TweetService = Depends(svc),
):
    obj, err = await service.create(principal, payload.content)
    raise_for(err)
    return ok(TweetOut.model_validate(obj), "Tweet added successfully", 201)

@router.get("/user/{user_id}", response_model=ApiResponse[list[TweetOut]])
async def get_user_tweets(
    user_id: uuid.UUID,
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(get_principal),
    service: TweetService = Depends(svc),
):
    tweets = await service.list_for_user(user_id, page)
    return ok([TweetOut.model_validate(t) for t in tweets], "User tweets retrieved successfully")

@router.patch("/{tweet_id}", response_model=ApiResponse[TweetOut])
async def update_tweet(
    tweet_id: uuid.UUID,
    payload: TweetIn,
    principal: Principal = Depends(get_principal),
    service: TweetService = Depends(svc),
):
    obj, err = await service.update(principal, tweet_id, payload.content)
    raise_for(err)
    return ok(TweetOut.model_validate(obj), "Tweet updated successfully")

@router.delete("/{tweet_id}", response_model=ApiResponse[None])
async def delete_tweet(
    tweet_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: TweetService = Depends(svc),
):
    _, err = await service.delete(principal, tweet_id)
    raise_for(err)
    return ok(None, "Tweet deleted successfully")
