import uuid
from datetime import datetime
from pydantic import BaseModel

class VideoOut(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True
