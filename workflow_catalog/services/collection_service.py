"""Collection service — listing, detail view, creation and membership."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from workflow_catalog.models import Collection, CollectionCategory, CollectionWorkflow, Template, User
from workflow_catalog.schemas.collection import CollectionCreate
from workflow_catalog.services import projection
from workflow_catalog.services.category_service import (
    collection_categories,
    get_or_create_category,
    template_categories,
)
from workflow_catalog.services.filters import apply_filters, collection_filters
from workflow_catalog.utils.params import lenient_int

logger = logging.getLogger(__name__)

MAX_CATEGORY_PARAMS = 50


async def _member_template_ids(db: AsyncSession, collection_id: int) -> list[int]:
    stmt = (
        select(CollectionWorkflow.template_id)
        .where(CollectionWorkflow.collection_id == collection_id)
        .order_by(CollectionWorkflow.template_id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_collections(
    db: AsyncSession, search: str | None = None, category_ids: list[int] | None = None
) -> list[dict[str, Any]]:
    stmt = apply_filters(select(Collection).distinct(), collection_filters(search, category_ids or []))
    stmt = stmt.order_by(Collection.rank, Collection.name)
    collections = list((await db.execute(stmt)).scalars().all())

    # One membership query per collection; collections are few.
    return [
        projection.collection_list_item(c, await _member_template_ids(db, c.id))
        for c in collections
    ]


async def get_collection_detail(db: AsyncSession, collection_id: int) -> dict[str, Any] | None:
    collection = await db.get(Collection, collection_id)
    if not collection:
        return None

    stmt = (
        select(Template, User)
        .join(CollectionWorkflow, Template.id == CollectionWorkflow.template_id)
        .join(User, Template.user_id == User.id)
        .where(CollectionWorkflow.collection_id == collection_id)
        .order_by(Template.id)
    )
    workflows = []
    for template, user in (await db.execute(stmt)).all():
        categories = await template_categories(db, template.id)
        workflows.append(projection.template_member(template, user, categories))

    categories = await collection_categories(db, collection_id)
    return {"collection": projection.collection_detail(collection, workflows, categories)}


async def collection_exists(db: AsyncSession, collection_id: int) -> bool:
    result = await db.execute(select(Collection.id).where(Collection.id == collection_id))
    return result.scalar_one_or_none() is not None


async def link_collection_workflow(db: AsyncSession, collection_id: int, template_id: int) -> bool:
    """Insert-or-ignore a membership row; True if a new row was written."""
    stmt = (
        sqlite_insert(CollectionWorkflow)
        .values(collection_id=collection_id, template_id=template_id)
        .on_conflict_do_nothing()
    )
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount > 0


async def link_collection_category(db: AsyncSession, collection_id: int, category_id: int) -> bool:
    stmt = (
        sqlite_insert(CollectionCategory)
        .values(collection_id=collection_id, category_id=category_id)
        .on_conflict_do_nothing()
    )
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount > 0


def _workflow_ref_id(ref: Any) -> int:
    if not isinstance(ref, dict):
        return 0
    return lenient_int(ref.get("id"), 0)


async def create_collection(db: AsyncSession, data: CollectionCreate) -> dict[str, Any]:
    rank = data.rank or 0
    result = await db.execute(
        insert(Collection).values(
            rank=rank,
            name=data.name,
            description=data.description,
            total_views=data.total_views,
            created_at=data.created_at,
        )
    )
    await db.commit()
    collection_id = result.inserted_primary_key[0]
    logger.info("Created collection %d (%s)", collection_id, data.name)

    for ref in data.workflows or []:
        template_id = _workflow_ref_id(ref)
        if template_id > 0:
            await link_collection_workflow(db, collection_id, template_id)

    for category_doc in data.categories or []:
        category_id = await get_or_create_category(db, category_doc)
        if not category_id:
            logger.warning("Skipping unresolvable category for collection %d: %r",
                           collection_id, category_doc)
            continue
        await link_collection_category(db, collection_id, category_id)

    return {
        "id": collection_id,
        "name": data.name,
        "rank": rank,
        "totalViews": data.total_views,
        "createdAt": data.created_at,
        "workflows": data.workflows if data.workflows is not None else [],
        "nodes": [],
        "message": "Collection created successfully",
    }


async def add_workflow_to_collection(
    db: AsyncSession, collection_id: int, template_id: int
) -> bool:
    """Link a template into a collection; False when it was already a member.

    Callers check that both rows exist first.
    """
    added = await link_collection_workflow(db, collection_id, template_id)
    if not added:
        logger.info("Template %d already in collection %d", template_id, collection_id)
    return added
