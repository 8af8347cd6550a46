"""
Note Repository.

Data access layer for notes. Every statement is scoped to one owner, and
every mutation is a single conditional UPDATE so ownership, liveness and
(for content) the expected revision are checked atomically with the write.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import func, or_, select, update

from notevault.core.exceptions import NotFoundError
from notevault.core.utils import utc_now
from notevault.models.note import Note
from notevault.repositories.base import OwnedRepository
from notevault.schemas.note_query import LIKE_ESCAPE, NoteQuerySpec


class NoteRepository(OwnedRepository[Note]):
    """
    Repository for Note model.

    Inherits owner-scoped lookups from OwnedRepository and adds listing,
    flag, soft-delete and revision-checked content writes.
    """

    model = Note

    @staticmethod
    def _live(owner_id: str, note_id: str) -> tuple:
        return (
            Note.id == note_id,
            Note.owner_id == owner_id,
            Note.deleted_at.is_(None),
        )

    async def get_live(self, owner_id: str, note_id: str) -> Note:
        """
        Get a note that is owned by owner_id and not soft-deleted.

        Raises:
            NotFoundError: If missing, deleted, or owned by someone else
        """
        result = await self.session.execute(
            select(Note).where(*self._live(owner_id, note_id))
        )
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError("Note not found")
        return note

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def _filters(self, spec: NoteQuerySpec) -> list[Any]:
        filters: list[Any] = [Note.owner_id == spec.owner_id]
        if spec.exclude_deleted:
            filters.append(Note.deleted_at.is_(None))
        if not spec.include_archived:
            filters.append(Note.is_archived == False)  # noqa: E712
        if spec.category_id is not None:
            filters.append(Note.category_id == spec.category_id)

        pattern = spec.search_pattern
        if pattern is not None:
            filters.append(
                or_(
                    Note.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Note.content.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return filters

    async def list_page(self, spec: NoteQuerySpec) -> tuple[list[Note], int]:
        """
        One page of notes matching the query, plus the total match count.

        Pinned notes come first, then most recently updated; id breaks
        ties so pages never overlap.
        """
        filters = self._filters(spec)

        result = await self.session.execute(
            select(Note)
            .where(*filters)
            .order_by(
                Note.is_pinned.desc(),
                Note.updated_at.desc(),
                Note.id.desc(),
            )
            .limit(spec.limit)
            .offset(spec.offset)
        )
        items = list(result.scalars().all())

        count_result = await self.session.execute(
            select(func.count()).select_from(Note).where(*filters)
        )
        return items, count_result.scalar_one()

    # -------------------------------------------------------------------------
    # Conditional writes
    # -------------------------------------------------------------------------

    async def _update_live(self, owner_id: str, note_id: str, **values: Any) -> datetime:
        now = utc_now()
        result = await self.session.execute(
            update(Note)
            .where(*self._live(owner_id, note_id))
            .values(updated_at=now, **values)
        )
        if result.rowcount == 0:
            raise NotFoundError("Note not found")
        return now

    async def update_flags(
        self,
        owner_id: str,
        note_id: str,
        is_pinned: bool | None = None,
        is_archived: bool | None = None,
    ) -> datetime:
        """
        Set pin/archive flags; omitted flags are left untouched.

        Returns:
            The new updated_at

        Raises:
            NotFoundError: If missing, deleted, or owned by someone else
        """
        values: dict[str, Any] = {}
        if is_pinned is not None:
            values["is_pinned"] = is_pinned
        if is_archived is not None:
            values["is_archived"] = is_archived
        return await self._update_live(owner_id, note_id, **values)

    async def set_category(
        self,
        owner_id: str,
        note_id: str,
        category_id: str | None,
    ) -> datetime:
        """Point a live note at a category (or none). Caller checks ownership of category_id."""
        return await self._update_live(owner_id, note_id, category_id=category_id)

    async def soft_delete(self, owner_id: str, note_id: str) -> datetime:
        """
        Mark a live note as deleted.

        A note that is already deleted no longer matches, so a second
        call raises NotFoundError.
        """
        now = utc_now()
        result = await self.session.execute(
            update(Note)
            .where(*self._live(owner_id, note_id))
            .values(deleted_at=now, updated_at=now)
        )
        if result.rowcount == 0:
            raise NotFoundError("Note not found")
        return now

    async def update_content_if_revision(
        self,
        owner_id: str,
        note_id: str,
        expected_revision: int,
        content: str,
        title: str | None = None,
    ) -> tuple[int, datetime] | None:
        """
        Write content (and optionally title) only if the note is still at
        expected_revision.

        The revision check and the write are one UPDATE statement, so of
        two writers holding the same revision exactly one matches.

        Returns:
            (new_revision, updated_at) on success, None if no row matched
        """
        now = utc_now()
        new_revision = expected_revision + 1
        values: dict[str, Any] = {
            "content": content,
            "revision": new_revision,
            "updated_at": now,
        }
        if title is not None:
            values["title"] = title

        result = await self.session.execute(
            update(Note)
            .where(
                *self._live(owner_id, note_id),
                Note.revision == expected_revision,
            )
            .values(**values)
        )
        if result.rowcount == 0:
            return None
        return new_revision, now

    # -------------------------------------------------------------------------
    # Category references
    # -------------------------------------------------------------------------

    async def count_live_in_category(self, owner_id: str, category_id: str) -> int:
        """Number of non-deleted notes of owner_id filed under category_id."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(
                Note.owner_id == owner_id,
                Note.category_id == category_id,
                Note.deleted_at.is_(None),
            )
        )
        return result.scalar_one()

    async def move_category(
        self,
        owner_id: str,
        from_category_id: str,
        to_category_id: str | None,
    ) -> int:
        """
        Repoint every note of owner_id referencing from_category_id,
        soft-deleted ones included.

        Returns:
            Number of notes changed
        """
        result = await self.session.execute(
            update(Note)
            .where(
                Note.owner_id == owner_id,
                Note.category_id == from_category_id,
            )
            .values(category_id=to_category_id, updated_at=utc_now())
        )
        return result.rowcount
