"""Collection ORM models — ranked groupings of templates."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workflow_catalog.database import Base


class Collection(Base):
    __tablename__ = "collections"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    rank: Mapped[int] = mapped_column(Integer, default=0)
    name: Mapped[str] = mapped_column(String(512))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_views: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[str] = mapped_column(String(64))


class CollectionWorkflow(Base):
    __tablename__ = "collection_workflows"

    collection_id: Mapped[int] = mapped_column(ForeignKey("collections.id"), primary_key=True)
    template_id: Mapped[int] = mapped_column(ForeignKey("templates.id"), primary_key=True)


class CollectionCategory(Base):
    __tablename__ = "collection_categories"

    collection_id: Mapped[int] = mapped_column(ForeignKey("collections.id"), primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), primary_key=True)
