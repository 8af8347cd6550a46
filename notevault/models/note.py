"""
Note Model.

Database model for notes.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notevault.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin

NOTE_TITLE_MAX_LENGTH = 256
DEFAULT_NOTE_TITLE = "Untitled"


class Note(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Note database model.

    content holds an opaque serialized document (plain text or a
    serialized rich-text tree); it is never parsed here.

    revision starts at 0 and is incremented by exactly one on every
    content update; writers must present the revision they last read.

    Rows are soft-deleted through deleted_at and never removed.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index(
            "ix_notes_owner_listing",
            "owner_id",
            "deleted_at",
            "is_pinned",
            "updated_at",
        ),
    )

    title: Mapped[str] = mapped_column(
        String(NOTE_TITLE_MAX_LENGTH),
        nullable=False,
        default=DEFAULT_NOTE_TITLE,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_pinned: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    is_archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    revision: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, revision={self.revision})>"
