"""
Notes API Endpoints.

REST API endpoints for note management. Every route requires a bearer
token; the owner id comes from the token, never from the request body.
"""

from typing import Any

from fastapi import APIRouter, Query

from notevault.core.dependencies import DbSession, OwnerId, RequestId
from notevault.core.pagination import create_paginated_response
from notevault.schemas.base import ApiResponse
from notevault.schemas.note import (
    NoteArchiveUpdate,
    NoteCategoryUpdate,
    NoteContentUpdate,
    NoteCreate,
    NoteListItem,
    NotePinUpdate,
    NoteResponse,
    NoteRevision,
)
from notevault.services.note import NoteService

router = APIRouter()


@router.get(
    "",
    summary="List notes (paginated)",
    description=(
        "Pinned notes first, then most recently updated. Malformed paging "
        "values fall back to defaults; searches shorter than two characters "
        "are ignored."
    ),
)
async def list_notes(
    db: DbSession,
    owner_id: OwnerId,
    request_id: RequestId,
    q: str | None = Query(default=None, description="Search title and content"),
    category_id: str | None = Query(default=None, description="Category id or 'all'"),
    page: str | None = Query(default=None, description="Page number, from 1"),
    page_size: str | None = Query(default=None, description="Items per page (5-100)"),
    include_archived: str | None = Query(default=None, description="'true' to include archived"),
) -> dict[str, Any]:
    """List the caller's notes."""
    service = NoteService(db)
    result = await service.list_notes(
        owner_id,
        q=q,
        category_id=category_id,
        page=page,
        page_size=page_size,
        include_archived=include_archived,
    )
    return create_paginated_response(
        items=result.items,
        item_schema=NoteListItem,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        request_id=request_id,
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    owner_id: OwnerId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(
        owner_id,
        title=data.title,
        content=data.content,
        category_id=data.category_id,
    )
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
)
async def get_note(
    note_id: str,
    db: DbSession,
    owner_id: OwnerId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(owner_id, note_id)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.put(
    "/{note_id}/content",
    response_model=ApiResponse[NoteRevision],
    summary="Save note content",
    description=(
        "Applies only if the note is still at expected_revision. Returns 409 "
        "RES_REVISION_CONFLICT otherwise; reload the note and retry."
    ),
)
async def update_note_content(
    note_id: str,
    data: NoteContentUpdate,
    db: DbSession,
    owner_id: OwnerId,
) -> ApiResponse[NoteRevision]:
    """Revision-checked content save."""
    service = NoteService(db)
    revision = await service.update_note_content(
        owner_id,
        note_id,
        content=data.content,
        expected_revision=data.expected_revision,
        title=data.title,
    )
    return ApiResponse(data=revision)


@router.put("/{note_id}/pin", status_code=204, summary="Pin or unpin a note")
async def set_pin(
    note_id: str,
    data: NotePinUpdate,
    db: DbSession,
    owner_id: OwnerId,
) -> None:
    await NoteService(db).toggle_pin(owner_id, note_id, data.pinned)


@router.put("/{note_id}/archive", status_code=204, summary="Archive or unarchive a note")
async def set_archive(
    note_id: str,
    data: NoteArchiveUpdate,
    db: DbSession,
    owner_id: OwnerId,
) -> None:
    await NoteService(db).toggle_archive(owner_id, note_id, data.archived)


@router.put("/{note_id}/category", status_code=204, summary="File a note under a category")
async def set_category(
    note_id: str,
    data: NoteCategoryUpdate,
    db: DbSession,
    owner_id: OwnerId,
) -> None:
    await NoteService(db).assign_category(owner_id, note_id, data.category_id)


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Soft delete. Deleting an already deleted note returns 404.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    owner_id: OwnerId,
) -> None:
    await NoteService(db).soft_delete_note(owner_id, note_id)
