"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import sqlite3
from typing import Any

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData, event
from sqlalchemy.engine import Engine

from catalog_api.services._shared.ports.denylist_store import (
    InMemoryDenylistStore,
    TokenDenylistStore,
)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

DENYLIST_EXTENSION_KEY = "token_denylist"


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    """Turn on foreign-key enforcement for SQLite connections (off by default)."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, rate limiting and the denylist.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`catalog_api.models` package to ensure SQLAlchemy metadata is
        ready for migrations.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from catalog_api import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    app.extensions[DENYLIST_EXTENSION_KEY] = _build_denylist(app)

    @jwt.token_in_blocklist_loader
    def _is_token_revoked(_jwt_header: dict[str, Any], jwt_payload: dict[str, Any]) -> bool:
        return get_denylist().is_revoked(str(jwt_payload["jti"]))


def _build_denylist(app: Flask) -> TokenDenylistStore:
    """Pick the Redis-backed denylist when ``REDIS_URL`` is set, else in-memory."""
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        return InMemoryDenylistStore()

    from catalog_api.infra.redis.redis_denylist_store import RedisTokenDenylistStore

    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    return RedisTokenDenylistStore(client)


def get_denylist() -> TokenDenylistStore:
    """Return the denylist store bound to the current application."""
    store = current_app.extensions.get(DENYLIST_EXTENSION_KEY)
    if store is None:
        raise RuntimeError("Token denylist is not initialized. Call init_app() first.")
    return store
