import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.db import get_session
from vidtube.core.errors import raise_for
from vidtube.core.responses import ApiResponse, ok
from vidtube.core.security import get_principal, Principal
from vidtube.modules.subscriptions.schemas import SubscriptionOut, SubscriptionToggleOut
from vidtube.modules.subscriptions.service import SubscriptionService
from vidtube.modules.users.schemas import UserSummary

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> SubscriptionService:
    return SubscriptionService(session)

@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionToggleOut])
async def toggle_subscription(
    channel_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: SubscriptionService = Depends(svc),
):
    result, err = await service.toggle(principal, channel_id)
    raise_for(err)
    added, obj = result
    data = SubscriptionToggleOut(subscribed=added, subscription=SubscriptionOut.model_validate(obj) if obj else None)
    return ok(data, "Subscribed to the channel" if added else "Unsubscribed")

@router.get("/c/{channel_id}", response_model=ApiResponse[list[UserSummary]])
async def get_channel_subscribers(
    channel_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: SubscriptionService = Depends(svc),
):
    users, err = await service.subscribers(channel_id)
    raise_for(err)
    return ok([UserSummary.model_validate(u) for u in users], "Subscribers fetched successfully")

@router.get("/u/{subscriber_id}", response_model=ApiResponse[list[UserSummary]])
async def get_subscribed_channels(
    subscriber_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: SubscriptionService = Depends(svc),
):
    channels, err = await service.subscribed_channels(subscriber_id)
    raise_for(err)
    return ok([UserSummary.model_validate(c) for c in channels], "Subscribed channels fetched successfully")
