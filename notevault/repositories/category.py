"""
Category Repository.

Data access layer for categories, always scoped to one owner.
"""

from sqlalchemy import func, select

from notevault.models.category import Category
from notevault.repositories.base import OwnedRepository


class CategoryRepository(OwnedRepository[Category]):
    """Repository for Category model."""

    model = Category

    async def list_for_owner(self, owner_id: str) -> list[Category]:
        """All categories of an owner, ordered by name."""
        result = await self.session.execute(
            select(Category)
            .where(Category.owner_id == owner_id)
            .order_by(Category.name.asc(), Category.id.asc())
        )
        return list(result.scalars().all())

    async def name_taken(
        self,
        owner_id: str,
        name: str,
        exclude_id: str | None = None,
    ) -> bool:
        """
        Check whether owner_id already has a category called name.

        Args:
            owner_id: Owner to check within
            name: Normalized category name
            exclude_id: Category to ignore (the one being renamed)
        """
        stmt = (
            select(func.count())
            .select_from(Category)
            .where(Category.owner_id == owner_id, Category.name == name)
        )
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def get_for_reference(self, owner_id: str, category_id: str) -> Category | None:
        """
        Load a category that a note is about to reference.

        Takes a shared row lock so the category cannot be deleted until
        the referencing write commits (no-op on SQLite).
        """
        result = await self.session.execute(
            self._owned(owner_id, category_id).with_for_update(read=True)
        )
        return result.scalar_one_or_none()
