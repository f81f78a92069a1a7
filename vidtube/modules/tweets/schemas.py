import uuid
from datetime import datetime
from pydantic import BaseModel

class TweetIn(BaseModel):
    content: str | None = None

class TweetOut(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True
