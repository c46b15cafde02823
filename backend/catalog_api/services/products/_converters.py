from __future__ import annotations

from catalog_api.models.category import Category
from catalog_api.models.product import Product

from .dto import CategoryOut, ProductOut


def category_to_out(category: Category) -> CategoryOut:
    return CategoryOut(id=category.id, name=category.name)


def product_to_out(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category_id=product.category_id,
        category=category_to_out(product.category),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )
