"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. They serve as stable contracts between repositories, infrastructure
adapters and application services.

The translation to HTTP responses is handled by ``catalog_api/core/errors.py``
via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports ``table.column``,
    so callers may pass either form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (``uq_users_email``) or column path (``users.email``).

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Each subclass carries a ``default_message`` which is also the message
    presented to API clients.
    """

    default_message = "Service error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailedError(ServiceError):
    """
    Raised when input breaks a field rule only detectable at write time.

    :param errors: Field name → ordered list of messages.
    :type errors: dict[str, list[str]]
    """

    default_message = "Validation errors"

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__()
        self.errors = errors


# --------------------------------------------------------------------------- #
# Catalog rules
# --------------------------------------------------------------------------- #


class BusinessRuleError(ServiceError):
    """A domain constraint enforced by a service was violated."""


class InvalidPriceError(BusinessRuleError):
    default_message = "Product price must be positive."


# --------------------------------------------------------------------------- #
# Authentication & tokens
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """Credentials or bearer token could not authenticate a user."""


class InvalidCredentialsError(AuthenticationError):
    # Same message for unknown email and wrong password.
    default_message = "Credenciais inválidas."


class RegistrationError(ServiceError):
    default_message = "Falha ao registrar usuário."


class TokenError(ServiceError):
    """Base class for token lifecycle failures."""


class InvalidTokenError(TokenError):
    """Token is malformed, expired, revoked or names an unknown subject."""

    default_message = "Usuário não autenticado ou token inválido."


class TokenIssueError(TokenError):
    default_message = "Não foi possível gerar o token de acesso."


class TokenRevocationError(TokenError):
    default_message = "Falha ao fazer logout, por favor tente novamente."


class TokenRefreshError(TokenError):
    default_message = "Não foi possível atualizar o token, por favor faça login novamente."
