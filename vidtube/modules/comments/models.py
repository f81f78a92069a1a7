import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Text, ForeignKey
from vidtube.core.base import Base, TimestampedMixin

class Comment(Base, TimestampedMixin):
    content: Mapped[str] = mapped_column(Text)
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("video.id"), index=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"))
