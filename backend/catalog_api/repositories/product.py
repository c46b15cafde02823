"""Product repository with category eager-loading."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from catalog_api.models.product import Product
from catalog_api.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Persistence-only repository for :class:`Product`.

    Every read joins the owning category so serialized products can embed it
    without extra queries.
    """

    model = Product

    # ---------------------------- Hooks ----------------------------

    def _default_eagerload(self, stmt):
        return stmt.options(joinedload(Product.category))

    def _updatable_fields(self):
        return {"name", "description", "price", "category_id"}

    # ---------------------------- Reads ----------------------------

    def get_all(self) -> list[Product]:
        """Return every product ordered by id."""
        return self.list()

    def find_by_id(self, product_id: int) -> Product | None:
        """Return the product with ``product_id`` or ``None``."""
        return self.get(product_id)

    def find_by_name(self, name: str) -> Product | None:
        """Return the first product whose name equals ``name`` ignoring case.

        Matching is exact on the lowercased value, not a substring search.
        When several products share the name, the lowest id wins.
        """
        stmt = select(Product).where(func.lower(Product.name) == name.lower())
        stmt = self._default_eagerload(stmt).order_by(Product.id.asc())
        result = self.session.execute(stmt).scalars().first()
        return cast(Product | None, result)

    # ---------------------------- Writes ----------------------------

    def create(self, data: Mapping[str, Any]) -> Product:
        """Insert a product from validated ``data`` and return it with its category.

        :raises sqlalchemy.exc.IntegrityError: If ``category_id`` is unknown.
        """
        product = Product(**self._sanitize_update_fields(data))
        self.add(product)
        self.session.refresh(product, attribute_names=["category"])
        return product

    def update(self, product_id: int, fields: Mapping[str, Any]) -> Product | None:
        """Apply whitelisted ``fields`` to the product, locking its row first.

        :returns: The updated product, or ``None`` when it does not exist.
        """
        product = self.get_for_update(product_id)
        if product is None:
            return None
        self.assign_updates(product, fields)
        if "category_id" in fields:
            self.session.refresh(product, attribute_names=["category"])
        return product

    def delete(self, product_id: int) -> bool:
        """Delete the product; return ``False`` when it does not exist."""
        product = self.get(product_id)
        if product is None:
            return False
        self.remove(product)
        return True
