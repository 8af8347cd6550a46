# Import all models so Base.metadata knows every table
from notevault.models.base import Base
from notevault.models.category import Category, CategoryColor
from notevault.models.note import Note

__all__ = ["Base", "Category", "CategoryColor", "Note"]
