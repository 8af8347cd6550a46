"""
Note Schemas.

Pydantic schemas for note API request/response validation. Length
limits are repeated in the service layer, which is the authority.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from notevault.models.note import NOTE_TITLE_MAX_LENGTH


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=NOTE_TITLE_MAX_LENGTH,
        description="Note title; defaults to 'Untitled'",
        examples=["Project ideas"],
    )
    content: str | None = Field(
        default=None,
        description="Serialized note document",
        examples=["First draft of the roadmap."],
    )
    category_id: str | None = Field(
        default=None,
        description="Category to file the note under",
    )


class NoteContentUpdate(BaseModel):
    """Schema for a revision-checked content save."""

    content: str = Field(description="Serialized note document")
    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=NOTE_TITLE_MAX_LENGTH,
        description="New title, if it changed",
    )
    expected_revision: StrictInt = Field(
        description="Revision the editor last loaded",
    )


class NotePinUpdate(BaseModel):
    pinned: bool


class NoteArchiveUpdate(BaseModel):
    archived: bool


class NoteCategoryUpdate(BaseModel):
    """Schema for filing a note; null removes the category."""

    category_id: str | None = None


class NoteRevision(BaseModel):
    """Result of a successful content save."""

    id: str
    revision: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteResponse(BaseModel):
    """Schema for a single note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str | None = Field(description="Serialized note document")
    category_id: str | None = Field(description="Category id, if filed")
    is_pinned: bool
    is_archived: bool
    revision: int = Field(description="Current revision for conflict-checked saves")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteListItem(NoteResponse):
    """Schema for a note in listings."""
