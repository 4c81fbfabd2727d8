"""Collection request schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workflow_catalog.utils.params import SQLITE_INT_MAX, SQLITE_INT_MIN, lenient_int


class CollectionCreate(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., min_length=1)
    created_at: str = Field(..., alias="createdAt")
    rank: int | None = 0
    total_views: int | None = Field(None, alias="totalViews")
    description: str | None = None
    workflows: list[Any] | None = None  # [{id}], invalid entries skipped
    categories: list[Any] | None = None  # category documents, resolved on create

    @field_validator("rank", mode="before")
    @classmethod
    def parse_rank(cls, v: Any) -> int:
        return lenient_int(v, 0)

    @field_validator("total_views", mode="before")
    @classmethod
    def parse_total_views(cls, v: Any) -> int | None:
        return lenient_int(v, None)

    @field_validator("workflows", "categories", mode="before")
    @classmethod
    def drop_non_list(cls, v: Any) -> list[Any] | None:
        return v if isinstance(v, list) else None


class CollectionMembership(BaseModel):
    """Add one template to one collection."""

    collection_id: int = Field(
        ..., alias="collectionId", strict=True, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX
    )
    template_id: int = Field(
        ..., alias="templateId", strict=True, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX
    )


class CollectionMembershipResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    collection_id: int = Field(..., alias="collectionId")
    template_id: int = Field(..., alias="templateId")
