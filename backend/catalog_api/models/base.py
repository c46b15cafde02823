"""Column mixins shared by the catalog models (SQLAlchemy 2.0 typed mapping)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Integer surrogate key ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """``created_at`` / ``updated_at`` maintained by the database clock.

    Both are timezone-aware; ``updated_at`` is bumped on every ORM update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


class ReprMixin:
    """``<Model id=1 attr='value'>`` using the names in ``__repr_attrs__``."""

    __repr_attrs__: tuple[str, ...] = ()

    def __repr__(self) -> str:
        parts = [f"id={getattr(self, 'id', None)}"]
        parts += [f"{name}={getattr(self, name, None)!r}" for name in self.__repr_attrs__]
        body = " ".join(parts)
        return f"<{type(self).__name__} {body}>"
