"""
Category Model.

User-defined labels that notes can be filed under.
"""

import enum

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from notevault.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin

CATEGORY_NAME_MAX_LENGTH = 64


class CategoryColor(str, enum.Enum):
    """Display palette for categories. Purely presentational."""

    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    RED = "red"
    YELLOW = "yellow"
    ORANGE = "orange"
    PINK = "pink"
    INDIGO = "indigo"
    SLATE = "slate"
    GRAY = "gray"


DEFAULT_CATEGORY_COLOR = CategoryColor.SLATE


class Category(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Category database model.

    Names are unique per owner. Color is stored as its palette label.
    """

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_categories_owner_id_name"),
    )

    name: Mapped[str] = mapped_column(
        String(CATEGORY_NAME_MAX_LENGTH),
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(16),
        default=DEFAULT_CATEGORY_COLOR.value,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
