"""Factories for :class:`Category` and :class:`Product`."""

from __future__ import annotations

from decimal import Decimal

import factory
from catalog_api.models.category import Category
from catalog_api.models.product import Product

from tests.factories import BaseFactory


class CategoryFactory(BaseFactory):
    class Meta:
        model = Category

    id = None
    name = factory.Sequence(lambda n: f"Category {n}")


class ProductFactory(BaseFactory):
    """Persisted product attached to a fresh category by default."""

    class Meta:
        model = Product

    id = None
    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("sentence", nb_words=6)
    price = factory.LazyFunction(lambda: Decimal("19.90"))
    category = factory.SubFactory(CategoryFactory)
