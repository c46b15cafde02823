"""Category repository."""

from __future__ import annotations

from sqlalchemy import select

from catalog_api.models.category import Category
from catalog_api.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Persistence-only repository for :class:`Category`."""

    model = Category

    def exists_by_id(self, category_id: int) -> bool:
        """Return ``True`` when a category with ``category_id`` exists."""
        stmt = select(Category.id).where(Category.id == category_id)
        return self.session.execute(stmt).first() is not None

    def get_or_create(self, name: str) -> tuple[Category, bool]:
        """Return ``(category, created)`` for ``name``, inserting when missing."""
        existing = self.find_one(name=name)
        if existing is not None:
            return existing, False
        return self.add(Category(name=name)), True
