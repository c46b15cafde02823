"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction against an in-memory SQLite
database; the session joins it through SAVEPOINTs, so ``commit()`` inside
services and factories never leaks between cases.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from catalog_api.core.config import TestingConfig
from catalog_api.core.extensions import db as _db  # Flask-SQLAlchemy instance
from catalog_api.factory import create_app  # application factory under test
from tests.helpers.auth import expired_token, issue_token


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Keeps revoked tokens in-process; login rate limiting stays on with a
      generous in-memory budget.
    - Avoids hitting external services.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    REDIS_URL = None
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"
    AUTH_LOGIN_RATE_LIMIT = "1000 per minute"
    CORS_ORIGINS = "http://localhost:5173"
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestConfig, instance_relative_config=False)
    with application.app_context():
        yield application


@pytest.fixture(scope="session")
def db(app: Flask) -> Generator[Any, None, None]:
    """Create database tables once per test session.

    pysqlite defers BEGIN on its own, which breaks SAVEPOINT handling; the
    driver is put in autocommit mode and SQLAlchemy emits BEGIN itself.
    """
    engine = _db.engine

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection: Any, _record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope="session")
def connection(db: Any) -> Generator[Any, None, None]:
    """Keep a dedicated connection open for the whole session.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by the per-test outer transaction.
    """
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db: Any, connection: Any) -> Generator[Any, None, None]:
    """Provide a SQLAlchemy session joined to a per-test outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; everything it commits
        is discarded when the outer transaction rolls back.

    Notes
    -----
    ``join_transaction_mode="create_savepoint"`` turns the session's commits
    into SAVEPOINT releases. Flask-SQLAlchemy still calls ``remove()`` at
    the end of every request, which is why factories commit instead of flush.
    """
    outer = connection.begin()
    factory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(factory)

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture()
def client(app: Flask, session: Any):
    """Return a Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session: Any) -> Generator[None, None, None]:
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)


# -- Authentication helpers ----------------------------------------------------
@pytest.fixture()
def user(session: Any):
    """Persist and return a user whose password is ``"secret123"``."""
    from tests.factories.user import UserFactory

    return UserFactory(password="secret123")


@pytest.fixture()
def category(session: Any):
    from tests.factories.catalog import CategoryFactory

    return CategoryFactory()


@pytest.fixture()
def auth_token(app: Flask, user: Any) -> str:
    """Generate a valid JWT for ``user``."""
    return issue_token(user.id)


@pytest.fixture()
def auth_header(auth_token: str) -> dict[str, str]:
    """Authorization header for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture()
def expired_auth_token(app: Flask, user: Any) -> str:
    """Return an already expired JWT for ``user``."""
    return expired_token(user.id)
