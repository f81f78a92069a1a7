import uuid
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

class UserOut(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str | None
    created_at: datetime

    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    id: uuid.UUID
    username: str
    full_name: str
    avatar: str

    class Config:
        from_attributes = True

class LoginIn(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str = Field(..., min_length=1)

class LoginOut(BaseModel):
    user: UserOut
    access_token: str

class AccountUpdate(BaseModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None

class ChannelProfileOut(BaseModel):
    id: uuid.UUID
    username: str
    full_name: str
    avatar: str
    cover_image: str | None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
