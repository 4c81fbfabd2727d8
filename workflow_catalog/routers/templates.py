"""Template catalog endpoints: categories, search, listing, detail and upsert."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from workflow_catalog.database import get_db
from workflow_catalog.schemas.template import TemplateUpsert, TemplateUpsertResponse
from workflow_catalog.services import category_service, template_service
from workflow_catalog.utils.params import parse_id, parse_int

router = APIRouter()


@router.get("/categories")
async def list_categories(db: AsyncSession = Depends(get_db)):
    return {"categories": await category_service.list_categories(db)}


@router.get("/search")
async def search_templates(
    search: str | None = None,
    category: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Paginated search; ``category`` is a comma-separated list matched with OR."""
    return await template_service.search_templates(
        db,
        search=search,
        categories=template_service.parse_category_csv(category),
        page=parse_int(page),
        limit=parse_int(limit),
    )


@router.get("/workflows")
async def list_workflows(db: AsyncSession = Depends(get_db)):
    return await template_service.list_all_templates(db)


@router.get("/workflows/{template_id}")
async def get_workflow(template_id: str, db: AsyncSession = Depends(get_db)):
    detail = await template_service.get_template_detail(db, parse_id(template_id))
    if detail is None:
        raise HTTPException(status_code=404, detail="Workflow not found")
    return detail


@router.put("/workflows", response_model=TemplateUpsertResponse, status_code=201)
async def put_workflow(body: TemplateUpsert, db: AsyncSession = Depends(get_db)):
    try:
        template_id = await template_service.create_or_replace_template(db, body.workflow)
    except template_service.InvalidUserError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TemplateUpsertResponse(id=template_id)
