"""
Category Schemas.

Pydantic schemas for category API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from notevault.models.category import CATEGORY_NAME_MAX_LENGTH, CategoryColor


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(
        min_length=1,
        max_length=CATEGORY_NAME_MAX_LENGTH,
        examples=["Work"],
    )
    color: CategoryColor | None = Field(
        default=None,
        description="Palette label; defaults to slate",
    )


class CategoryRename(BaseModel):
    """Schema for renaming a category."""

    name: str = Field(min_length=1, max_length=CATEGORY_NAME_MAX_LENGTH)


class CategoryResponse(BaseModel):
    """Schema for category in API responses."""

    id: str
    name: str
    color: CategoryColor
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
