"""Product category model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .product import Product


class Category(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Grouping referenced by products.

    Categories are read-only from the API's point of view; they are created by
    the ``flask seed`` commands or directly in the database.
    """

    __tablename__ = "categories"
    __repr_attrs__ = ("name",)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    products: Mapped[list[Product]] = relationship(
        back_populates="category",
        lazy="select",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("name", name="uq_categories_name"),)
