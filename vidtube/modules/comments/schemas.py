import uuid
from datetime import datetime
from pydantic import BaseModel

class CommentIn(BaseModel):
    content: str | None = None

class CommentOut(BaseModel):
    id: uuid.UUID
    video_id: uuid.UUID
    owner_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True
