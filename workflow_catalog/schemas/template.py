"""Template write payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workflow_catalog.utils.params import SQLITE_INT_MAX, SQLITE_INT_MIN, lenient_int


class WorkflowPayload(BaseModel):
    """The ``workflow`` object of a template upsert.

    Unknown keys are tolerated; the opaque sub-documents (``workflow``,
    ``workflowInfo``, ``nodes``, ``image``) are stored without inspection.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | None = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    name: str
    description: str
    created_at: str = Field(..., alias="createdAt")
    total_views: int | None = Field(0, alias="totalViews")
    recent_views: int | None = Field(0, alias="recentViews")
    price: float | None = None
    purchase_url: str | None = Field(None, alias="purchaseUrl")

    workflow: dict[str, Any]
    workflow_info: Any = Field(None, alias="workflowInfo")
    nodes: Any = None
    image: Any = None

    user: dict[str, Any]
    categories: Any = None

    @field_validator("total_views", "recent_views", mode="before")
    @classmethod
    def parse_view_count(cls, v: Any) -> int:
        return lenient_int(v, 0)


class TemplateUpsert(BaseModel):
    workflow: WorkflowPayload


class TemplateUpsertResponse(BaseModel):
    id: int
