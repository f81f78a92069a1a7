import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.errors import Failure
from vidtube.core.security import Principal
from vidtube.modules.subscriptions.models import Subscription
from vidtube.modules.subscriptions.repository import SubscriptionRepository
from vidtube.modules.users.models import User
from vidtube.modules.users.repository import UserRepository

class SubscriptionService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = SubscriptionRepository(session)
        self.users = UserRepository(session)

    async def toggle(self, principal: Principal, channel_id: uuid.UUID) -> tuple[tuple[bool, Subscription | None] | None, Failure | None]:
        if channel_id == principal.user_id:
            return None, Failure.validation("You cannot subscribe to your own channel")
        _, err = await self.users.get_or_fail(channel_id)
        if err:
            return None, Failure.not_found("Channel not found")
        added, obj = await self.repo.toggle(channel_id=channel_id, subscriber_id=principal.user_id)
        await self.session.commit()
        return (added, obj), None

    async def subscribers(self, channel_id: uuid.UUID) -> tuple[Sequence[User] | None, Failure | None]:
        _, err = await self.users.get_or_fail(channel_id)
        if err:
            return None, Failure.not_found("Channel not found")
        return await self.repo.subscribers_of(channel_id), None

    async def subscribed_channels(self, subscriber_id: uuid.UUID) -> tuple[Sequence[User] | None, Failure | None]:
        _, err = await self.users.get_or_fail(subscriber_id)
        if err:
            return None, err
        return await self.repo.channels_of(subscriber_id), None

    async def counts(self, user_id: uuid.UUID) -> tuple[int, int]:
        subscribers = await self.repo.count(Subscription.channel_id == user_id)
        subscribed_to = await self.repo.count(Subscription.subscriber_id == user_id)
        return subscribers, subscribed_to

    async def is_subscribed(self, channel_id: uuid.UUID, subscriber_id: uuid.UUID) -> bool:
        return await self.repo.find_one(channel_id=channel_id, subscriber_id=subscriber_id) is not None
