import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, ForeignKey, UniqueConstraint
from vidtube.core.base import Base, TimestampedMixin

class Playlist(Base, TimestampedMixin):
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)

class PlaylistVideo(Base, TimestampedMixin):
    __tablename__ = "playlist_video"
    __table_args__ = (UniqueConstraint("playlist_id", "video_id", name="uq_playlist_video"),)

    playlist_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("playlist.id"), index=True)
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("video.id"), index=True)
