"""User ORM model — template authors, created on first reference."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workflow_catalog.database import Base
from workflow_catalog.models.raw_json import RawJSON


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256))
    username: Mapped[str] = mapped_column(String(256), unique=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    links: Mapped[list] = mapped_column(RawJSON(list), nullable=True)  # JSON list of link objects
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
