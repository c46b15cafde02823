from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from catalog_api.repositories.product import ProductRepository
from catalog_api.services._shared.base import BaseService
from catalog_api.services._shared.errors import InvalidPriceError

from ._converters import product_to_out
from .dto import ProductOut

logger = logging.getLogger(__name__)


def ensure_positive_price(value: Any) -> Decimal:
    """Return ``value`` as a Decimal, raising :class:`InvalidPriceError` unless > 0."""
    if isinstance(value, bool):
        raise InvalidPriceError()
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidPriceError() from exc
    if not price.is_finite() or price <= 0:
        raise InvalidPriceError()
    return price


class ProductService(BaseService):
    """
    Product use cases.

    Not-found is reported as data (``None`` / ``False``), never raised. The
    price rule is checked before any repository call.
    """

    def list_products(self) -> list[ProductOut]:
        with self.ro_uow() as uow:
            repo: ProductRepository = uow.products
            products = [product_to_out(p) for p in repo.get_all()]
        logger.info("Products listed", extra={"count": len(products)})
        return products

    def get_product(self, product_id: int) -> ProductOut | None:
        with self.ro_uow() as uow:
            product = uow.products.find_by_id(product_id)
            if product is None:
                logger.warning("Product not found", extra={"product_id": product_id})
                return None
            return product_to_out(product)

    def get_product_by_name(self, name: str) -> ProductOut | None:
        """Case-insensitive exact match; the lowest id wins on duplicates."""
        with self.ro_uow() as uow:
            product = uow.products.find_by_name(name)
            if product is None:
                logger.warning("Product not found by name")
                return None
            return product_to_out(product)

    def category_exists(self, category_id: int) -> bool:
        with self.ro_uow() as uow:
            return uow.categories.exists_by_id(category_id)

    def create_product(self, fields: Mapping[str, Any]) -> ProductOut:
        """
        Create a product from validated fields.

        :raises InvalidPriceError: If ``price`` is missing, non-numeric or not positive.
        """
        data = dict(fields)
        data["price"] = ensure_positive_price(data.get("price"))

        with self.rw_uow() as uow:
            product = uow.products.create(data)
            out = product_to_out(product)
        logger.info("Product created", extra={"product_id": out.id})
        return out

    def update_product(self, product_id: int, fields: Mapping[str, Any]) -> ProductOut | None:
        """
        Apply a partial update; only supplied fields change.

        :returns: The updated product, or ``None`` when it does not exist.
        :raises InvalidPriceError: If a supplied ``price`` is not positive.
        """
        data = dict(fields)
        with self.rw_uow() as uow:
            repo: ProductRepository = uow.products
            if repo.get_for_update(product_id) is None:
                logger.warning("Product not found for update", extra={"product_id": product_id})
                return None
            if data.get("price") is not None:
                data["price"] = ensure_positive_price(data["price"])
            product = repo.update(product_id, data)
            out = product_to_out(product)
        logger.info("Product updated", extra={"product_id": product_id})
        return out

    def delete_product(self, product_id: int) -> bool:
        with self.rw_uow() as uow:
            deleted = uow.products.delete(product_id)
        if deleted:
            logger.info("Product deleted", extra={"product_id": product_id})
        else:
            logger.warning("Product not found for delete", extra={"product_id": product_id})
        return deleted
