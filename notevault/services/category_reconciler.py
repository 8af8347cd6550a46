"""
Category Deletion Reconciler.

Keeps note → category references consistent when a category is removed:
every note of the owner that points at the category is either cleared
or moved to another category of the same owner.

The reconciler validates everything before it writes, and it runs inside
the same transaction as the category row delete, so a failure leaves
both the notes and the category untouched.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.exceptions import InvalidCategoryError, ValidationError
from notevault.core.logging import get_logger
from notevault.repositories.category import CategoryRepository
from notevault.repositories.note import NoteRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class CategoryResolution:
    """
    What to do with notes filed under a category being deleted.

    Either reassign_to another category, or clear the reference, or
    neither (only allowed when no live note uses the category).
    """

    reassign_to: str | None = None
    clear: bool = False

    def __post_init__(self) -> None:
        if self.reassign_to is not None and self.clear:
            raise ValidationError(
                "Choose either reassign_to or clear, not both",
                details={"resolution": "reassign_to and clear are mutually exclusive"},
            )

    @property
    def is_empty(self) -> bool:
        return self.reassign_to is None and not self.clear


class CategoryReconciler:
    """Repairs note references to a category that is about to be deleted."""

    def __init__(self, session: AsyncSession) -> None:
        self.notes = NoteRepository(session)
        self.categories = CategoryRepository(session)

    async def resolve_target(
        self,
        owner_id: str,
        category_id: str,
        resolution: CategoryResolution,
    ) -> str | None:
        """
        Check the resolution and return the category notes should move to.

        Raises:
            InvalidCategoryError: If reassign_to is the category itself,
                or is not a category owned by owner_id
        """
        target = resolution.reassign_to
        if target is None:
            return None

        if target == category_id:
            raise InvalidCategoryError("Cannot reassign notes to the category being deleted")

        if await self.categories.get_for_reference(owner_id, target) is None:
            raise InvalidCategoryError("Reassignment target category not found")

        return target

    async def reconcile(
        self,
        owner_id: str,
        category_id: str,
        target: str | None,
    ) -> int:
        """
        Point every note referencing category_id at target, or at nothing.

        target must already have been checked with resolve_target().

        Returns:
            Number of notes changed
        """
        moved = await self.notes.move_category(owner_id, category_id, target)

        logger.info(
            "Category references reconciled",
            extra={
                "category_id": category_id,
                "reassigned_to": target,
                "notes_moved": moved,
            },
        )
        return moved
