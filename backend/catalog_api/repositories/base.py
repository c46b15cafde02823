"""Generic repository base for SQLAlchemy 2.x.

Repositories here are persistence-only:

- reads go through the subclass's eager-loading hook and come back in
  primary-key order;
- writes are flushed but never committed (the Unit of Work owns the
  transaction);
- updates are restricted to an explicit per-repository field whitelist.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from catalog_api.core.extensions import db

E = TypeVar("E")  # mapped entity


class BaseRepository(Generic[E]):
    """Persistence operations shared by every aggregate repository.

    Subclasses set ``model`` and may override:

    * ``_default_eagerload`` – loader options added to reads.
    * ``_updatable_fields`` – keys accepted by :meth:`assign_updates`.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared by the Unit of Work. Falls back to the
            Flask-scoped ``db.session`` when omitted.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Hooks ------------------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _updatable_fields(self) -> set[str]:
        return set()

    # ------------------------------ Internals --------------------------------

    def _pk(self) -> InstrumentedAttribute[Any]:
        pk_attr = getattr(self.model, "id", None)
        if pk_attr is None:
            raise RuntimeError(f"{type(self).__name__} needs a model with an 'id' column.")
        return cast(InstrumentedAttribute[Any], pk_attr)

    def _where_equal(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        """Add ``column == value`` for each of ``filters``.

        :raises AttributeError: When a key is not a column of ``model``.
        """
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        return stmt

    def _sanitize_update_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``fields`` once every key is known to be updatable.

        :raises ValueError: On any key outside :meth:`_updatable_fields`.
        """
        unknown = sorted(set(fields) - self._updatable_fields())
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return dict(fields)

    # --------------------------------- Reads ---------------------------------

    def get(self, entity_id: Any) -> E | None:
        """Return the entity with primary key ``entity_id`` or ``None``."""
        stmt = self._default_eagerload(select(self.model).where(self._pk() == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get` but row-locked (``FOR UPDATE``; a no-op on SQLite).

        Eager loads are skipped: outer joins cannot be locked on PostgreSQL.
        """
        stmt = select(self.model).where(self._pk() == entity_id).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        """Return the lowest-id entity whose columns equal ``filters``."""
        stmt = self._where_equal(select(self.model), filters)
        stmt = self._default_eagerload(stmt).order_by(self._pk().asc())
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = self._where_equal(select(func.count()).select_from(self.model), filters)
        return bool(self.session.execute(stmt).scalar_one())

    def list(self) -> list[E]:
        """Return every entity in primary-key order."""
        stmt = self._default_eagerload(select(self.model)).order_by(self._pk().asc())
        return cast(list[E], list(self.session.execute(stmt).scalars().unique().all()))

    # --------------------------------- Writes --------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def remove(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def assign_updates(self, instance: E, fields: Mapping[str, Any]) -> E:
        """Set whitelisted ``fields`` on ``instance`` through ``setattr`` and flush.

        Going through ``setattr`` keeps the model's ``@validates`` hooks in play.

        :raises ValueError: When a key is not updatable.
        """
        for key, value in self._sanitize_update_fields(fields).items():
            setattr(instance, key, value)
        self.flush()
        return instance
