import uuid
from datetime import datetime
from pydantic import BaseModel

class LikeOut(BaseModel):
    id: uuid.UUID
    subject_type: str
    subject_id: uuid.UUID
    liked_by: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True

class ToggleOut(BaseModel):
    liked: bool
    like: LikeOut | None = None
