import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, UniqueConstraint
from vidtube.core.base import Base, TimestampedMixin

class Like(Base, TimestampedMixin):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("subject_type", "subject_id", "liked_by", name="uq_like_subject_actor"),)

    subject_type: Mapped[str] = mapped_column(String(16))  # video | comment | tweet
    subject_id: Mapped[uuid.UUID] = mapped_column(index=True)
    liked_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), index=True)
