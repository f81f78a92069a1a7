import uuid
from datetime import datetime
from pydantic import BaseModel

class SubscriptionOut(BaseModel):
    id: uuid.UUID
    channel_id: uuid.UUID
    subscriber_id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True

class SubscriptionToggleOut(BaseModel):
    subscribed: bool
    subscription: SubscriptionOut | None = None
