import uuid
from typing import Sequence
from sqlalchemy import select
from vidtube.core.repository import ToggleRepository
from vidtube.modules.subscriptions.models import Subscription
from vidtube.modules.users.models import User

class SubscriptionRepository(ToggleRepository[Subscription]):
    model = Subscription
    label = "Subscription"

    async def subscribers_of(self, channel_id: uuid.UUID) -> Sequence[User]:
        q = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at.desc())
        )
        res = await self.session.execute(q)
        return res.scalars().all()

    async def channels_of(self, subscriber_id: uuid.UUID) -> Sequence[User]:
        q = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc())
        )
        res = await self.session.execute(q)
        return res.scalars().all()
