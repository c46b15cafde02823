"""Units of work bound to Flask-SQLAlchemy's request-scoped session."""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from catalog_api.core.extensions import db
from catalog_api.repositories import CategoryRepository, ProductRepository, UserRepository
from catalog_api.uow.base import UnitOfWork


class _SessionRepositories:
    """Builds every repository on one session so they share a transaction."""

    def __init__(self, session: Session | scoped_session) -> None:
        self.session = session
        self.users = UserRepository(session=session)
        self.categories = CategoryRepository(session=session)
        self.products = ProductRepository(session=session)


class SQLAlchemyUnitOfWork(_SessionRepositories, UnitOfWork):
    """Read-write scope: committed on a clean exit, rolled back otherwise."""

    def __init__(self) -> None:
        super().__init__(db.session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(_SessionRepositories, UnitOfWork):
    """
    Read scope that refuses to persist anything.

    While the block runs, a ``before_flush`` hook rejects pending inserts,
    updates and deletes, and :meth:`commit` always raises. Exiting neither
    commits nor rolls back, so rows loaded inside the block can still be
    serialized afterwards.
    """

    def __init__(self) -> None:
        super().__init__(db.session)
        self._watched: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        session = self.session
        target = session() if isinstance(session, scoped_session) else session
        event.listen(target, "before_flush", _reject_pending_writes)
        self._watched = target
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        watched, self._watched = self._watched, None
        if watched is not None:
            event.remove(watched, "before_flush", _reject_pending_writes)

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()


def _reject_pending_writes(session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError("Read-only UnitOfWork: refusing to flush pending changes.")
