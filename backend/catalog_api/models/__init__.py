from catalog_api.models.category import Category
from catalog_api.models.product import Product
from catalog_api.models.user import User

__all__ = [
    "Category",
    "Product",
    "User",
]
