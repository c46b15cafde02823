"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from catalog_api.repositories.base import BaseRepository
from catalog_api.repositories.category import CategoryRepository
from catalog_api.repositories.product import ProductRepository
from catalog_api.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Domain
    "CategoryRepository",
    "ProductRepository",
    "UserRepository",
]
