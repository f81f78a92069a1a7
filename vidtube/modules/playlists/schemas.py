import uuid
from datetime import datetime
from pydantic import BaseModel, Field
from vidtube.modules.videos.schemas import VideoOut

class PlaylistCreate(BaseModel):
    name: str | None = None
    description: str | None = None

class PlaylistUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = None

class PlaylistOut(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True

class PlaylistDetailOut(PlaylistOut):
    videos: list[VideoOut] = []
