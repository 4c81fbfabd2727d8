"""Import-shaped alias clients hit when pulling a template into their editor."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from workflow_catalog.database import get_db
from workflow_catalog.services import template_service
from workflow_catalog.utils.params import parse_id

router = APIRouter()


@router.get("/{template_id}")
async def get_workflow_for_import(template_id: str, db: AsyncSession = Depends(get_db)):
    doc = await template_service.get_template_for_import(db, parse_id(template_id))
    if doc is None:
        raise HTTPException(status_code=404, detail="Workflow not found")
    return doc
