"""
Abstract Unit of Work contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog_api.repositories import (
        CategoryRepository,
        ProductRepository,
        UserRepository,
    )


class UnitOfWork(ABC):
    """
    Transactional boundary for one use case.

    All repositories exposed by a unit of work share its transaction. Leaving
    the ``with`` block normally commits; leaving it through an exception rolls
    back and lets the exception propagate.
    """

    users: UserRepository
    categories: CategoryRepository
    products: ProductRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
