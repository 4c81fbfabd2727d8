"""Row -> document folding for the catalog's external JSON shape.

Key names and null handling here are part of the wire contract: nullable
columns render as ``null`` (never a missing key) apart from the list and
detail overrides noted on each builder. Opaque JSON columns arrive already
parsed (and degraded to ``{}``/``[]``) from ``RawJSON``.
"""

from __future__ import annotations

from typing import Any

from workflow_catalog.models import Collection, Template, User


def user_document(user: User, *, with_id: bool = False) -> dict[str, Any]:
    doc: dict[str, Any] = {"id": user.id} if with_id else {}
    doc.update(
        {
            "name": user.name,
            "username": user.username,
            "bio": user.bio,
            "verified": bool(user.verified),
            "links": user.links,
            "avatar": user.avatar,
        }
    )
    return doc


def _workflow_core(template: Template) -> dict[str, Any]:
    views = template.total_views or 0
    return {
        "id": template.id,
        "name": template.name,
        "views": views,
        "recentViews": template.recent_views or 0,
        "totalViews": views,
        "createdAt": template.created_at,
        "description": template.description or "",
    }


def _last_updated_by(template: Template) -> int:
    if template.last_updated_by is not None:
        return template.last_updated_by
    return template.user_id


def template_search_item(template: Template, user: User) -> dict[str, Any]:
    """One entry of the search listing; missing price renders as integer 0."""
    return {
        "id": template.id,
        "name": template.name,
        "totalViews": template.total_views or 0,
        "purchaseUrl": template.purchase_url,
        "user": user_document(user, with_id=True),
        "description": template.description,
        "createdAt": template.created_at,
        "nodes": template.nodes_data,
        "price": float(template.price) if template.price is not None else 0,
    }


def template_member(
    template: Template, user: User, categories: list[dict[str, Any]]
) -> dict[str, Any]:
    """Flat template shape embedded in a collection's ``workflows`` list."""
    doc = _workflow_core(template)
    doc["workflow"] = template.workflow_data
    doc["lastUpdatedBy"] = _last_updated_by(template)
    doc["workflowInfo"] = template.workflow_info
    doc["user"] = user_document(user)
    doc["nodes"] = template.nodes_data
    doc["categories"] = categories
    doc["image"] = template.image_data
    return doc


def template_detail(
    template: Template, user: User, categories: list[dict[str, Any]]
) -> dict[str, Any]:
    workflow = _workflow_core(template)
    workflow["price"] = float(template.price) if template.price is not None else None
    workflow["purchaseUrl"] = template.purchase_url
    workflow["workflow"] = template.workflow_data
    return {
        "workflow": workflow,
        "lastUpdatedBy": _last_updated_by(template),
        "user": user_document(user),
        "categories": categories,
        "workflowInfo": template.workflow_info,
        "nodes": template.nodes_data,
        "image": template.image_data,
    }


def template_import(template: Template) -> dict[str, Any]:
    return {"id": template.id, "name": template.name, "workflow": template.workflow_data}


def collection_list_item(collection: Collection, template_ids: list[int]) -> dict[str, Any]:
    return {
        "id": collection.id,
        "rank": collection.rank or 0,
        "name": collection.name,
        "totalViews": collection.total_views,
        "createdAt": collection.created_at,
        "workflows": [{"id": template_id} for template_id in template_ids],
        "nodes": [],
    }


def collection_detail(
    collection: Collection,
    workflows: list[dict[str, Any]],
    categories: list[dict[str, Any]],
) -> dict[str, Any]:
    """Detail view; missing description renders "" and missing totalViews 0."""
    return {
        "id": collection.id,
        "name": collection.name,
        "description": collection.description or "",
        "totalViews": collection.total_views if collection.total_views is not None else 0,
        "createdAt": collection.created_at,
        "workflows": workflows,
        "nodes": [],
        "categories": categories,
        "image": [],
    }
