"""Factory Boy base wired to the per-test SQLAlchemy session."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the session the ``_factories_session`` fixture installs."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        if cls._session is None:
            raise RuntimeError("No factory session: request the 'session' fixture first.")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Abstract factory persisting through :class:`SQLAlchemySession`."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        # The commit only releases a SAVEPOINT, and the row survives
        # the session.remove() run after each request
        sqlalchemy_session_persistence = "commit"
