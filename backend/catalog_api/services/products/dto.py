from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class CategoryOut:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class ProductOut:
    """
    Product projection returned by :class:`ProductService`.

    :param price: Two-decimal amount as stored.
    :type price: Decimal
    :param category: Owning category, always loaded.
    :type category: CategoryOut
    """

    id: int
    name: str
    description: str | None
    price: Decimal
    category_id: int
    category: CategoryOut
    created_at: datetime | None
    updated_at: datetime | None
