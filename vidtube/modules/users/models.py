from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String
from vidtube.core.base import Base, TimestampedMixin

class User(Base, TimestampedMixin):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)  # stored lowercase
    email: Mapped[str] = mapped_column(String(320), unique=True)
    full_name: Mapped[str] = mapped_column(String(200))
    avatar: Mapped[str] = mapped_column(String(1024))
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(256))
