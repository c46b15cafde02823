"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from catalog_api.models.product import Product
from catalog_api.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Eletrônicos",
    "Livros",
    "Casa e Cozinha",
    "Esportes",
)

DEMO_USER: dict[str, str] = {
    "name": "Demo User",
    "email": "demo@example.com",
    "password": "demo123",
}

PRODUCT_FIXTURES: list[dict[str, Any]] = [
    {
        "name": "Fone de Ouvido Bluetooth",
        "description": "Fone sem fio com cancelamento de ruído.",
        "price": Decimal("299.90"),
        "category": "Eletrônicos",
    },
    {
        "name": "Teclado Mecânico",
        "description": None,
        "price": Decimal("459.00"),
        "category": "Eletrônicos",
    },
    {
        "name": "Clean Code",
        "description": "A Handbook of Agile Software Craftsmanship.",
        "price": Decimal("120.50"),
        "category": "Livros",
    },
    {
        "name": "Panela de Pressão",
        "description": "Capacidade de 4,5 litros.",
        "price": Decimal("189.99"),
        "category": "Casa e Cozinha",
    },
    {
        "name": "Bola de Futebol",
        "description": None,
        "price": Decimal("79.90"),
        "category": "Esportes",
    },
]


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def seed_categories(
    names: Iterable[str] = DEFAULT_CATEGORIES, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create each category in ``names`` unless it already exists."""
    if verbose:
        LOGGER.info("Seeding categories...")
    summary: dict[str, dict[str, int]] = {}
    with SQLAlchemyUnitOfWork() as uow:
        for name in names:
            _, created = uow.categories.get_or_create(name.strip())
            _touch(summary, "categories", created)
    return summary


def seed_demo_catalog(*, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo user and a handful of products in the default categories."""
    if verbose:
        LOGGER.info("Seeding demo user and products...")
    summary: dict[str, dict[str, int]] = {}
    with SQLAlchemyUnitOfWork() as uow:
        if uow.users.exists_by_email(DEMO_USER["email"]):
            _touch(summary, "users", False)
        else:
            uow.users.create(**DEMO_USER)
            _touch(summary, "users", True)

        for fixture in PRODUCT_FIXTURES:
            category, _ = uow.categories.get_or_create(fixture["category"])
            if uow.products.exists(name=fixture["name"]):
                _touch(summary, "products", False)
                continue
            uow.products.add(
                Product(
                    name=fixture["name"],
                    description=fixture["description"],
                    price=fixture["price"],
                    category_id=category.id,
                )
            )
            _touch(summary, "products", True)
    return summary


def run_all(*, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for result in (seed_categories(verbose=verbose), seed_demo_catalog(verbose=verbose)):
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = [
    "DEFAULT_CATEGORIES",
    "seed_categories",
    "seed_demo_catalog",
    "run_all",
]
