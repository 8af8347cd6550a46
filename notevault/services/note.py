"""
Note Service.

Business logic layer for notes: listing, creation, revision-checked
content saves, flags, filing, and soft deletion. Every method takes the
authenticated owner id explicitly and only ever touches that owner's rows.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.exceptions import InvalidCategoryError, RevisionConflictError, ValidationError
from notevault.core.pagination import page_count
from notevault.events.publishers import ChangePublisher
from notevault.models.note import DEFAULT_NOTE_TITLE, NOTE_TITLE_MAX_LENGTH, Note
from notevault.repositories.category import CategoryRepository
from notevault.repositories.note import NoteRepository
from notevault.schemas.note import NoteRevision
from notevault.schemas.note_query import NoteQuerySpec
from notevault.services.base import BaseService


@dataclass
class NotePage:
    """One page of a note listing."""

    items: list[Note]
    total: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.page_size)


class NoteService(BaseService):
    """
    Service for note business logic.

    Content saves use optimistic concurrency: the caller sends the
    revision it last saw, and the save only applies if the note is still
    at that revision. A mismatch and a missing note look the same to
    the caller (RevisionConflictError); both mean "refetch".
    """

    def __init__(
        self,
        session: AsyncSession,
        publisher: ChangePublisher | None = None,
    ) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.categories = CategoryRepository(session)
        self.events = publisher or ChangePublisher(session)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_notes(
        self,
        owner_id: str,
        q: Any = None,
        category_id: Any = None,
        page: Any = None,
        page_size: Any = None,
        include_archived: Any = None,
    ) -> NotePage:
        """
        List one page of the owner's notes.

        Parameters are taken as received from the request and normalized;
        malformed values fall back to defaults rather than failing.
        """
        owner_id = self._require_owner(owner_id)
        spec = NoteQuerySpec.build(
            owner_id,
            q=q,
            category_id=category_id,
            page=page,
            page_size=page_size,
            include_archived=include_archived,
        )
        self._log_debug(
            "Listing notes",
            page=spec.page,
            page_size=spec.page_size,
            searching=spec.search is not None,
            category_id=spec.category_id,
        )

        items, total = await self._execute_db_operation(
            "list_notes",
            self.repo.list_page(spec),
        )
        return NotePage(items=items, total=total, page=spec.page, page_size=spec.page_size)

    async def get_note(self, owner_id: str, note_id: str) -> Note:
        """
        Get one live note.

        Raises:
            NotFoundError: If missing, deleted, or owned by someone else
        """
        owner_id = self._require_owner(owner_id)
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_live(owner_id, note_id),
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def _resolve_category(self, owner_id: str, category_id: Any) -> str | None:
        """
        Check that category_id, if given, is a category of owner_id.

        Raises:
            InvalidCategoryError: If it is foreign, missing, or not an id
        """
        if category_id is None:
            return None
        if not isinstance(category_id, str) or not category_id.strip():
            raise InvalidCategoryError("Category id must be a non-empty string")

        category = await self.categories.get_for_reference(owner_id, category_id)
        if category is None:
            raise InvalidCategoryError("Category not found")
        return category.id

    def _normalize_title(self, title: Any) -> str:
        return self._normalize_text(title, "title", NOTE_TITLE_MAX_LENGTH)

    async def create_note(
        self,
        owner_id: str,
        title: str | None = None,
        content: str | None = None,
        category_id: str | None = None,
    ) -> Note:
        """
        Create a note at revision 0.

        Raises:
            ValidationError: If title is given but empty or too long
            InvalidCategoryError: If category_id is not one of the owner's categories
        """
        owner_id = self._require_owner(owner_id)
        normalized_title = DEFAULT_NOTE_TITLE if title is None else self._normalize_title(title)
        if content is not None and not isinstance(content, str):
            raise ValidationError("content must be text", details={"content": "Expected a string"})

        self._log_operation("Creating note", title=normalized_title)

        resolved_category = await self._execute_db_operation(
            "resolve_category",
            self._resolve_category(owner_id, category_id),
        )
        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                owner_id=owner_id,
                title=normalized_title,
                content=content,
                category_id=resolved_category,
                revision=0,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        self.events.note_created(owner_id, note.id)
        return note

    async def update_note_content(
        self,
        owner_id: str,
        note_id: str,
        content: str,
        expected_revision: int,
        title: str | None = None,
    ) -> NoteRevision:
        """
        Save note content if the note is still at expected_revision.

        Returns:
            The note id, its new revision (expected_revision + 1) and updated_at

        Raises:
            ValidationError: If content, title, or expected_revision are malformed
            RevisionConflictError: If no live note of owner_id with that id is at
                expected_revision
        """
        owner_id = self._require_owner(owner_id)
        if not isinstance(content, str):
            raise ValidationError("content must be text", details={"content": "Expected a string"})
        if (
            isinstance(expected_revision, bool)
            or not isinstance(expected_revision, int)
            or expected_revision < 0
        ):
            raise ValidationError(
                "expected_revision must be a non-negative integer",
                details={"expected_revision": "Expected an integer >= 0"},
            )
        normalized_title = None if title is None else self._normalize_title(title)

        self._log_operation(
            "Saving note content",
            note_id=note_id,
            expected_revision=expected_revision,
        )

        outcome = await self._execute_db_operation(
            "update_note_content",
            self.repo.update_content_if_revision(
                owner_id,
                note_id,
                expected_revision,
                content,
                title=normalized_title,
            ),
        )
        if outcome is None:
            self._logger.info(
                "Note content save rejected",
                extra={"note_id": note_id, "expected_revision": expected_revision},
            )
            raise RevisionConflictError()

        revision, updated_at = outcome
        fields = ["content"] if normalized_title is None else ["content", "title"]
        self.events.note_updated(owner_id, note_id, fields)
        return NoteRevision(id=note_id, revision=revision, updated_at=updated_at)

    async def toggle_pin(self, owner_id: str, note_id: str, pin: bool) -> None:
        """
        Pin or unpin a note.

        Raises:
            NotFoundError: If missing, deleted, or owned by someone else
        """
        owner_id = self._require_owner(owner_id)
        self._log_operation("Setting note pin", note_id=note_id, pinned=bool(pin))
        await self._execute_db_operation(
            "toggle_pin",
            self.repo.update_flags(owner_id, note_id, is_pinned=bool(pin)),
        )
        self.events.note_updated(owner_id, note_id, ["is_pinned"])

    async def toggle_archive(self, owner_id: str, note_id: str, archive: bool) -> None:
        """
        Archive or unarchive a note.

        Raises:
            NotFoundError: If missing, deleted, or owned by someone else
        """
        owner_id = self._require_owner(owner_id)
        self._log_operation("Setting note archive", note_id=note_id, archived=bool(archive))
        await self._execute_db_operation(
            "toggle_archive",
            self.repo.update_flags(owner_id, note_id, is_archived=bool(archive)),
        )
        self.events.note_updated(owner_id, note_id, ["is_archived"])

    async def assign_category(
        self,
        owner_id: str,
        note_id: str,
        category_id: str | None,
    ) -> None:
        """
        File a note under a category, or remove its category with None.

        Raises:
            InvalidCategoryError: If category_id is not one of the owner's categories
            NotFoundError: If the note is missing, deleted, or owned by someone else
        """
        owner_id = self._require_owner(owner_id)
        self._log_operation("Assigning note category", note_id=note_id, category_id=category_id)

        resolved_category = await self._execute_db_operation(
            "resolve_category",
            self._resolve_category(owner_id, category_id),
        )
        await self._execute_db_operation(
            "assign_category",
            self.repo.set_category(owner_id, note_id, resolved_category),
        )
        self.events.note_updated(owner_id, note_id, ["category_id"])

    async def soft_delete_note(self, owner_id: str, note_id: str) -> None:
        """
        Soft-delete a note.

        Deleting an already deleted note raises NotFoundError rather than
        succeeding quietly.

        Raises:
            NotFoundError: If missing, already deleted, or owned by someone else
        """
        owner_id = self._require_owner(owner_id)
        self._log_operation("Deleting note", note_id=note_id)
        await self._execute_db_operation(
            "soft_delete_note",
            self.repo.soft_delete(owner_id, note_id),
        )
        self.events.note_deleted(owner_id, note_id)
