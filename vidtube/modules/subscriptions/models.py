import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import ForeignKey, UniqueConstraint
from vidtube.core.base import Base, TimestampedMixin

class Subscription(Base, TimestampedMixin):
    __table_args__ = (UniqueConstraint("channel_id", "subscriber_id", name="uq_subscription_pair"),)

    channel_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)
    subscriber_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)
