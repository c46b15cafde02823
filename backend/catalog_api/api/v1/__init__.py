"""Version 1 of the catalog API."""

from __future__ import annotations

from flask import Blueprint

from .auth import bp as auth_bp
from .health import bp as health_bp
from .products import bp as products_bp

API_VERSION = "v1"

#: ``(blueprint, prefix below /api/v1)``; health answers on the version root.
REGISTRY: tuple[tuple[Blueprint, str], ...] = (
    (health_bp, ""),
    (auth_bp, "/auth"),
    (products_bp, "/products"),
)
