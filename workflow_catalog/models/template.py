"""Template ORM model — a stored workflow plus catalog metadata."""

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workflow_catalog.database import Base
from workflow_catalog.models.raw_json import RawJSON


class Template(Base):
    __tablename__ = "templates"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(512))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(String(64))  # caller-supplied, not parsed
    total_views: Mapped[int] = mapped_column(Integer, default=0)
    recent_views: Mapped[int] = mapped_column(Integer, default=0)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    purchase_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    last_updated_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)

    # Opaque documents, passed through untouched
    workflow_data: Mapped[dict] = mapped_column(RawJSON(dict), nullable=True)
    workflow_info: Mapped[dict] = mapped_column(RawJSON(dict), nullable=True)
    nodes_data: Mapped[list] = mapped_column(RawJSON(list), nullable=True)
    image_data: Mapped[list] = mapped_column(RawJSON(list), nullable=True)


class TemplateCategory(Base):
    __tablename__ = "template_categories"

    template_id: Mapped[int] = mapped_column(ForeignKey("templates.id"), primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), primary_key=True)
