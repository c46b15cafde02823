"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, RegisterSchema, TokenResponseSchema
from .common import BaseSchema, WholeNumber, not_blank
from .product import (
    CATEGORY_MISSING,
    CategorySchema,
    ProductCreateSchema,
    ProductSchema,
    ProductUpdateSchema,
)
from .user import UserSchema

__all__ = [
    "BaseSchema",
    "not_blank",
    "WholeNumber",
    "LoginSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "UserSchema",
    "CategorySchema",
    "ProductSchema",
    "ProductCreateSchema",
    "ProductUpdateSchema",
    "CATEGORY_MISSING",
]
