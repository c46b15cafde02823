"""Product model belonging to a category."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from catalog_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .category import Category


class Product(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Sellable item.

    Fields
    ------
    name : str
        Required, up to 255 characters.
    description : str | None
        Optional free text.
    price : Decimal
        Strictly positive amount with two decimal places.
    category_id : int
        Foreign key to :class:`Category`; deleting a referenced category is
        rejected by the database.
    """

    __tablename__ = "products"
    __repr_attrs__ = ("name",)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    )

    category: Mapped[Category] = relationship(back_populates="products")

    __table_args__ = (
        CheckConstraint("price > 0", name="price_positive"),
        Index("ix_products_category_id", "category_id"),
        Index("ix_products_name", "name"),
    )

    @validates("name")
    def _strip_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Product name is required.")
        return value.strip()
