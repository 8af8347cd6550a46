"""
Category Service.

Business logic layer for categories: per-owner unique names, renames,
and deletion with reconciliation of the notes filed under the category.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.exceptions import CategoryInUseError, DuplicateNameError, ValidationError
from notevault.events.publishers import ChangePublisher
from notevault.models.category import (
    CATEGORY_NAME_MAX_LENGTH,
    DEFAULT_CATEGORY_COLOR,
    Category,
    CategoryColor,
)
from notevault.repositories.category import CategoryRepository
from notevault.repositories.note import NoteRepository
from notevault.services.base import BaseService
from notevault.services.category_reconciler import CategoryReconciler, CategoryResolution


class CategoryService(BaseService):
    """Service for category business logic."""

    def __init__(
        self,
        session: AsyncSession,
        publisher: ChangePublisher | None = None,
    ) -> None:
        super().__init__(session)
        self.repo = CategoryRepository(session)
        self.notes = NoteRepository(session)
        self.reconciler = CategoryReconciler(session)
        self.events = publisher or ChangePublisher(session)

    def _normalize_name(self, name: Any) -> str:
        return self._normalize_text(name, "name", CATEGORY_NAME_MAX_LENGTH)

    def _normalize_color(self, color: Any) -> str:
        if color is None:
            return DEFAULT_CATEGORY_COLOR.value
        try:
            return CategoryColor(color).value
        except ValueError:
            raise ValidationError(
                "Unknown category color",
                details={"color": f"Expected one of {[c.value for c in CategoryColor]}"},
            )

    async def list_categories(self, owner_id: str) -> list[Category]:
        """All of the owner's categories, ordered by name."""
        owner_id = self._require_owner(owner_id)
        return await self._execute_db_operation(
            "list_categories",
            self.repo.list_for_owner(owner_id),
        )

    async def create_category(
        self,
        owner_id: str,
        name: str,
        color: CategoryColor | str | None = None,
    ) -> Category:
        """
        Create a category.

        Raises:
            ValidationError: If the trimmed name is not 1-64 characters or
                color is not in the palette
            DuplicateNameError: If the owner already has a category with this name
        """
        owner_id = self._require_owner(owner_id)
        normalized_name = self._normalize_name(name)
        normalized_color = self._normalize_color(color)

        self._log_operation("Creating category", name=normalized_name)

        if await self._execute_db_operation(
            "check_category_name",
            self.repo.name_taken(owner_id, normalized_name),
        ):
            raise DuplicateNameError()

        category = await self._execute_db_operation(
            "create_category",
            self.repo.create(owner_id=owner_id, name=normalized_name, color=normalized_color),
            on_conflict=DuplicateNameError,
        )
        self.events.category_created(owner_id, category.id)
        return category

    async def rename_category(self, owner_id: str, category_id: str, name: str) -> Category:
        """
        Rename a category.

        Raises:
            ValidationError: If the trimmed name is not 1-64 characters
            NotFoundError: If the category is missing or owned by someone else
            DuplicateNameError: If another category of the owner has this name
        """
        owner_id = self._require_owner(owner_id)
        normalized_name = self._normalize_name(name)

        category = await self._execute_db_operation(
            "get_category",
            self.repo.get_owned(owner_id, category_id),
        )
        if category.name == normalized_name:
            return category

        self._log_operation("Renaming category", category_id=category_id, name=normalized_name)

        if await self._execute_db_operation(
            "check_category_name",
            self.repo.name_taken(owner_id, normalized_name, exclude_id=category.id),
        ):
            raise DuplicateNameError()

        category.name = normalized_name
        await self._execute_db_operation(
            "rename_category",
            self._flush_and_refresh(category),
            on_conflict=DuplicateNameError,
        )
        self.events.category_updated(owner_id, category.id)
        return category

    async def _flush_and_refresh(self, category: Category) -> None:
        await self.session.flush()
        await self.session.refresh(category)

    async def delete_category(
        self,
        owner_id: str,
        category_id: str,
        resolution: CategoryResolution | None = None,
    ) -> None:
        """
        Delete a category and reconcile the notes filed under it.

        With no live notes in the category, deletion always proceeds. With
        live notes, the resolution must say whether to clear or reassign
        them; otherwise nothing is changed.

        Raises:
            NotFoundError: If the category is missing or owned by someone else
            InvalidCategoryError: If reassign_to is the category itself or not
                one of the owner's categories
            CategoryInUseError: If live notes use the category and no
                resolution was given
        """
        owner_id = self._require_owner(owner_id)
        resolution = resolution or CategoryResolution()

        self._log_operation(
            "Deleting category",
            category_id=category_id,
            reassign_to=resolution.reassign_to,
            clear=resolution.clear,
        )

        category = await self._execute_db_operation(
            "get_category",
            self.repo.get_owned(owner_id, category_id, for_update=True),
        )
        target = await self._execute_db_operation(
            "check_reassign_target",
            self.reconciler.resolve_target(owner_id, category.id, resolution),
        )

        in_use = await self._execute_db_operation(
            "count_category_notes",
            self.notes.count_live_in_category(owner_id, category.id),
        )
        if in_use and resolution.is_empty:
            raise CategoryInUseError(
                f"Category is used by {in_use} note(s); clear or reassign them first"
            )

        moved = await self._execute_db_operation(
            "reconcile_category",
            self.reconciler.reconcile(owner_id, category.id, target),
        )
        await self._execute_db_operation(
            "delete_category",
            self.repo.delete(category),
        )

        self._log_debug("Category deleted", category_id=category_id, notes_moved=moved)
        self.events.category_deleted(
            owner_id, category_id, target, moved,
        )
