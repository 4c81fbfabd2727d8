"""Collection endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from workflow_catalog.database import get_db
from workflow_catalog.schemas.collection import (
    CollectionCreate,
    CollectionMembership,
    CollectionMembershipResponse,
)
from workflow_catalog.services import collection_service, template_service
from workflow_catalog.utils.params import indexed_int_params, parse_id

router = APIRouter()


@router.get("/collections")
async def list_collections(
    request: Request, search: str | None = None, db: AsyncSession = Depends(get_db)
):
    """List collections, optionally filtered by ``category[0]``, ``category[1]``, ... ids."""
    category_ids = indexed_int_params(
        request.query_params, "category", collection_service.MAX_CATEGORY_PARAMS
    )
    collections = await collection_service.list_collections(
        db, search=search, category_ids=category_ids
    )
    return {"collections": collections}


@router.get("/collections/{collection_id}")
async def get_collection(collection_id: str, db: AsyncSession = Depends(get_db)):
    detail = await collection_service.get_collection_detail(db, parse_id(collection_id))
    if detail is None:
        raise HTTPException(status_code=404, detail="Collection not found")
    return detail


@router.put("/collections", status_code=201)
async def create_collection(data: CollectionCreate, db: AsyncSession = Depends(get_db)):
    return await collection_service.create_collection(db, data)


@router.patch("/collections", response_model=CollectionMembershipResponse)
async def add_workflow_to_collection(
    body: CollectionMembership, db: AsyncSession = Depends(get_db)
):
    if not await collection_service.collection_exists(db, body.collection_id):
        raise HTTPException(status_code=404, detail="Collection not found")
    if not await template_service.template_exists(db, body.template_id):
        raise HTTPException(status_code=404, detail="Template not found")

    added = await collection_service.add_workflow_to_collection(
        db, body.collection_id, body.template_id
    )
    message = (
        "Workflow added to collection successfully"
        if added
        else "Workflow already exists in collection"
    )
    return CollectionMembershipResponse(
        message=message, collection_id=body.collection_id, template_id=body.template_id
    )
