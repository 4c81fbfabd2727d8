"""Category ORM model — named tags forming a parent/child forest."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from workflow_catalog.database import Base

DEFAULT_ICON = "🏷️"


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), unique=True)
    icon: Mapped[str] = mapped_column(String(64), default=DEFAULT_ICON)
    parent_id: Mapped[int | None] = mapped_column(ForeignKey("categories.id"), nullable=True)
