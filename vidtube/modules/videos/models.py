import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Float, Integer, Boolean, ForeignKey
from vidtube.core.base import Base, TimestampedMixin

class Video(Base, TimestampedMixin):
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)
    # references into the object store, e.g. <base>/video/upload/<public_id>.mp4
    video_file: Mapped[str] = mapped_column(String(1024))
    thumbnail: Mapped[str] = mapped_column(String(1024))
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    duration: Mapped[float] = mapped_column(Float)  # seconds
    views: Mapped[int] = mapped_column(Integer, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)
