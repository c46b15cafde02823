"""Environment-driven settings classes.

``APP_ENV`` picks one of :data:`CONFIG_MAP`; every individual value can also
be overridden through its own environment variable (a ``.env`` file is loaded
when present).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment.

    Parameters
    ----------
    name: str
        Variable to read.
    default: bool, optional
        Returned when the variable is unset.

    Returns
    -------
    bool
        ``True`` for ``1/true/yes/y/on`` (any case), ``False`` for anything else.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer from the environment; blank or malformed values give ``default``."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Mount point of the versioned API (``/api`` → ``/api/v1/...``).
    APP_VERSION: str
        Build identifier reported by the health endpoint.
    JWT_SECRET_KEY: str
        HMAC key used to sign access tokens.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Token lifetime (``JWT_TTL_MINUTES``); also reported as ``expires_in``.
    REDIS_URL: str | None
        When set, revoked tokens are tracked in Redis instead of in-process.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    CORS_ORIGINS: str
        Comma-separated allowed origins; blank or ``*`` allows any.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("JWT_TTL_MINUTES", 60))
    JWT_TOKEN_LOCATION = ["headers"]

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Revoked-token storage
    REDIS_URL = os.getenv("REDIS_URL") or None

    # Rate limiting
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")

    # HTTP surface
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROPAGATE_EXCEPTIONS = False

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on unless ``FLASK_DEBUG`` says otherwise."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Automated test runs.

    Notes
    -----
    - In-memory SQLite unless ``TEST_DATABASE_URL`` is set.
    - Revoked tokens stay in-process and rate limiting is off.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Production: no debug, no SQL echo."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the settings class named by ``APP_ENV`` (development when unknown)."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
