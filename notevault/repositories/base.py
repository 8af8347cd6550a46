"""
Base Repository.

Base class for owner-scoped repositories. Every lookup filters on both
the record id and the owner id, so a record belonging to someone else
is indistinguishable from a missing one.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.exceptions import NotFoundError
from notevault.core.logging import get_logger
from notevault.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class OwnedRepository(Generic[ModelType]):
    """
    Base repository with owner-scoped CRUD operations.

    Subclasses set the model class, which must have id and owner_id columns:

        class CategoryRepository(OwnedRepository[Category]):
            model = Category
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _owned(self, owner_id: str, id: str):
        return select(self.model).where(
            self.model.id == str(id),
            self.model.owner_id == owner_id,
        )

    async def get_owned_or_none(
        self,
        owner_id: str,
        id: str,
        for_update: bool = False,
    ) -> ModelType | None:
        """Get a record owned by owner_id, or None."""
        stmt = self._owned(owner_id, id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned(
        self,
        owner_id: str,
        id: str,
        for_update: bool = False,
    ) -> ModelType:
        """
        Get a record owned by owner_id.

        Raises:
            NotFoundError: If the record is missing or owned by someone else
        """
        instance = await self.get_owned_or_none(owner_id, id, for_update=for_update)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Hard-delete a loaded record."""
        await self.session.delete(instance)
        await self.session.flush()
