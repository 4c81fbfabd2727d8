"""Template service — search, detail projections and upsert of catalog templates."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import distinct, func, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from workflow_catalog.config import settings
from workflow_catalog.models import Template, TemplateCategory, User
from workflow_catalog.schemas.template import WorkflowPayload
from workflow_catalog.services import projection
from workflow_catalog.services.category_service import get_or_create_category, template_categories
from workflow_catalog.services.filters import apply_filters, template_filters
from workflow_catalog.services.user_service import get_or_create_user, resolve_username
from workflow_catalog.utils.params import SQLITE_INT_MAX

logger = logging.getLogger(__name__)

MAX_CATEGORY_TOKENS = 50


class InvalidUserError(ValueError):
    """The template's ``user`` document could not be resolved to a user row."""


def parse_category_csv(value: str | None) -> list[str]:
    """Split ``"A, B ,C"`` into trimmed, non-empty names (at most 50)."""
    if not value:
        return []
    names = [token.strip() for token in value.split(",")]
    return [name for name in names if name][:MAX_CATEGORY_TOKENS]


def page_window(page: int | None, limit: int | None) -> tuple[int, int]:
    """Return ``(limit, offset)``; absent or non-positive inputs fall back to defaults."""
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else settings.default_page_size
    limit = min(limit, settings.max_page_size)
    return limit, min((page - 1) * limit, SQLITE_INT_MAX)


async def search_templates(
    db: AsyncSession,
    search: str | None = None,
    categories: list[str] | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    filters = template_filters(search, categories or [])
    limit, offset = page_window(page, limit)

    count_stmt = apply_filters(
        select(func.count(distinct(Template.id))).select_from(Template), filters
    )
    total = (await db.execute(count_stmt)).scalar_one()

    stmt = apply_filters(
        select(Template, User).join(User, Template.user_id == User.id), filters
    )
    stmt = stmt.distinct().order_by(Template.id.desc()).limit(limit).offset(offset)
    result = await db.execute(stmt)

    return {
        "totalWorkflows": total,
        "workflows": [
            projection.template_search_item(template, user) for template, user in result.all()
        ],
    }


async def list_all_templates(db: AsyncSession) -> list[dict[str, Any]]:
    stmt = select(Template.id, Template.name, Template.total_views).order_by(Template.id)
    result = await db.execute(stmt)
    return [
        {"id": row.id, "name": row.name, "totalViews": row.total_views or 0} for row in result
    ]


async def get_template_detail(db: AsyncSession, template_id: int) -> dict[str, Any] | None:
    stmt = (
        select(Template, User)
        .join(User, Template.user_id == User.id)
        .where(Template.id == template_id)
    )
    row = (await db.execute(stmt)).first()
    if row is None:
        return None

    template, user = row
    categories = await template_categories(db, template.id)
    return projection.template_detail(template, user, categories)


async def get_template_for_import(db: AsyncSession, template_id: int) -> dict[str, Any] | None:
    """Reduced ``{id, name, workflow}`` shape clients fetch when importing a template."""
    template = await db.get(Template, template_id)
    if not template:
        return None
    return projection.template_import(template)


async def template_exists(db: AsyncSession, template_id: int) -> bool:
    result = await db.execute(select(Template.id).where(Template.id == template_id))
    return result.scalar_one_or_none() is not None


async def create_or_replace_template(db: AsyncSession, data: WorkflowPayload) -> int:
    """Insert or fully replace a template, then link its categories.

    A positive ``id`` is reused as the primary key so re-importing the same
    template replaces it; otherwise the database assigns one. The template
    row is committed before categories are linked, and a category that fails
    to resolve is skipped.
    """
    username = resolve_username(data.user)
    user_id = await get_or_create_user(db, data.user, username=username)
    if not user_id:
        raise InvalidUserError("Invalid or incomplete user object provided")

    values = {
        "name": data.name,
        "description": data.description,
        "created_at": data.created_at,
        "total_views": data.total_views or 0,
        "recent_views": data.recent_views or 0,
        "price": data.price,
        "purchase_url": data.purchase_url,
        "user_id": user_id,
        "last_updated_by": user_id,
        "workflow_data": data.workflow,
        "workflow_info": data.workflow_info,
        "nodes_data": data.nodes,
        "image_data": data.image,
    }

    if data.id and data.id > 0:
        stmt = sqlite_insert(Template).values(id=data.id, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Template.id],
            set_={key: stmt.excluded[key] for key in values},
        )
        await db.execute(stmt)
        template_id = data.id
    else:
        result = await db.execute(insert(Template).values(**values))
        template_id = result.inserted_primary_key[0]
    await db.commit()
    logger.info("Stored template %d (%s)", template_id, data.name)

    if isinstance(data.categories, list):
        for category_doc in data.categories:
            category_id = await get_or_create_category(db, category_doc)
            if not category_id:
                logger.warning("Skipping unresolvable category for template %d: %r",
                               template_id, category_doc)
                continue
            await link_template_category(db, template_id, category_id)

    return template_id


async def link_template_category(db: AsyncSession, template_id: int, category_id: int) -> bool:
    stmt = (
        sqlite_insert(TemplateCategory)
        .values(template_id=template_id, category_id=category_id)
        .on_conflict_do_nothing()
    )
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount > 0
