"""
Categories API Endpoints.

REST API endpoints for category management.
"""

from fastapi import APIRouter, Query

from notevault.core.dependencies import DbSession, OwnerId
from notevault.schemas.base import ApiResponse
from notevault.schemas.category import CategoryCreate, CategoryRename, CategoryResponse
from notevault.services.category import CategoryService
from notevault.services.category_reconciler import CategoryResolution

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List categories",
)
async def list_categories(
    db: DbSession,
    owner_id: OwnerId,
) -> ApiResponse[list[CategoryResponse]]:
    """List the caller's categories by name."""
    categories = await CategoryService(db).list_categories(owner_id)
    return ApiResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=201,
    summary="Create a category",
)
async def create_category(
    data: CategoryCreate,
    db: DbSession,
    owner_id: OwnerId,
) -> ApiResponse[CategoryResponse]:
    category = await CategoryService(db).create_category(owner_id, data.name, data.color)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.patch(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Rename a category",
)
async def rename_category(
    category_id: str,
    data: CategoryRename,
    db: DbSession,
    owner_id: OwnerId,
) -> ApiResponse[CategoryResponse]:
    category = await CategoryService(db).rename_category(owner_id, category_id, data.name)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.delete(
    "/{category_id}",
    status_code=204,
    summary="Delete a category",
    description=(
        "If live notes use the category, pass reassign_to=<category id> or "
        "clear=true; otherwise 409 RES_CATEGORY_IN_USE."
    ),
)
async def delete_category(
    category_id: str,
    db: DbSession,
    owner_id: OwnerId,
    reassign_to: str | None = Query(default=None, description="Move notes to this category"),
    clear: bool = Query(default=False, description="Remove the category from its notes"),
) -> None:
    resolution = CategoryResolution(reassign_to=reassign_to or None, clear=clear)
    await CategoryService(db).delete_category(owner_id, category_id, resolution)
