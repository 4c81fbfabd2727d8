"""Category resolution and lookups."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from workflow_catalog.models import Category, CollectionCategory, TemplateCategory
from workflow_catalog.models.category import DEFAULT_ICON

logger = logging.getLogger(__name__)

# Parent chains deeper than this are cut; the category is created as a root.
MAX_CATEGORY_DEPTH = 32


async def _category_id_by_name(db: AsyncSession, name: str) -> int | None:
    result = await db.execute(select(Category.id).where(Category.name == name))
    return result.scalar_one_or_none()


async def get_or_create_category(db: AsyncSession, doc: Any, depth: int = 0) -> int:
    """Return the id of the category named ``doc["name"]``, creating it if needed.

    The parent (if ``doc["parent"]`` is an object) is resolved first so the
    new row can point at it. A unique-name conflict on insert means another
    request created the row first; the id is then reselected. Returns 0 when
    the document is unusable.
    """
    if not isinstance(doc, dict):
        return 0

    name = doc.get("name")
    if not isinstance(name, str) or not name:
        logger.warning("get_or_create_category: category name is missing or empty")
        return 0

    category_id = await _category_id_by_name(db, name)
    if category_id:
        return category_id

    parent_id = 0
    parent = doc.get("parent")
    if isinstance(parent, dict):
        if depth + 1 >= MAX_CATEGORY_DEPTH:
            logger.warning("Category '%s' parent chain exceeds %d levels, dropping parent",
                           name, MAX_CATEGORY_DEPTH)
        else:
            parent_id = await get_or_create_category(db, parent, depth + 1)

    icon = doc.get("icon")
    stmt = insert(Category).values(
        name=name,
        icon=icon if isinstance(icon, str) else DEFAULT_ICON,
        parent_id=parent_id or None,
    )
    try:
        result = await db.execute(stmt)
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Insert failed for category '%s', retrying select: %s", name, exc.orig)
        return await _category_id_by_name(db, name) or 0

    return result.inserted_primary_key[0]


async def list_categories(db: AsyncSession) -> list[dict[str, Any]]:
    parent = aliased(Category)
    stmt = (
        select(Category, parent)
        .outerjoin(parent, Category.parent_id == parent.id)
        .order_by(Category.name)
    )
    result = await db.execute(stmt)

    categories = []
    for category, parent_row in result.all():
        categories.append(
            {
                "id": category.id,
                "name": category.name,
                "icon": category.icon,
                "parent": (
                    {"id": parent_row.id, "name": parent_row.name, "icon": parent_row.icon}
                    if parent_row is not None
                    else None
                ),
            }
        )
    return categories


async def template_categories(db: AsyncSession, template_id: int) -> list[dict[str, Any]]:
    stmt = (
        select(Category.id, Category.name)
        .join(TemplateCategory, Category.id == TemplateCategory.category_id)
        .where(TemplateCategory.template_id == template_id)
        .order_by(Category.id)
    )
    result = await db.execute(stmt)
    return [{"id": row.id, "name": row.name} for row in result]


async def collection_categories(db: AsyncSession, collection_id: int) -> list[dict[str, Any]]:
    stmt = (
        select(Category.id, Category.name)
        .join(CollectionCategory, Category.id == CollectionCategory.category_id)
        .where(CollectionCategory.collection_id == collection_id)
        .order_by(Category.id)
    )
    result = await db.execute(stmt)
    return [{"id": row.id, "name": row.name} for row in result]
