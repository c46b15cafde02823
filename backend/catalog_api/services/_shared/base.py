"""Shared service primitives: unit-of-work factories and error translation."""

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus

from catalog_api.core import errors as api_errors
from catalog_api.services._shared.errors import (
    AuthenticationError,
    BusinessRuleError,
    InvalidTokenError,
    RegistrationError,
    ServiceError,
    TokenIssueError,
    TokenRefreshError,
    TokenRevocationError,
    ValidationFailedError,
)
from catalog_api.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# Checked in order; the first matching base class wins.
_TRANSLATIONS: tuple[tuple[type[ServiceError], Callable[[ServiceError], api_errors.APIError]], ...] = (
    (ValidationFailedError, lambda e: api_errors.ValidationFailed(e.errors)),  # type: ignore[attr-defined]
    (
        BusinessRuleError,
        lambda e: api_errors.APIError(e.message, HTTPStatus.BAD_REQUEST, code="business_rule"),
    ),
    (AuthenticationError, lambda e: api_errors.Unauthorized(e.message)),
    (InvalidTokenError, lambda e: api_errors.Unauthorized(e.message)),
    (TokenRefreshError, lambda e: api_errors.Unauthorized(e.message)),
    (TokenIssueError, lambda e: api_errors.ServerError(e.message)),
    (TokenRevocationError, lambda e: api_errors.ServerError(e.message)),
    (RegistrationError, lambda e: api_errors.ServerError(e.message)),
    (ServiceError, lambda e: api_errors.APIError(e.message, HTTPStatus.BAD_REQUEST)),
)


class BaseService:
    """
    Base class for application services.

    Services orchestrate repositories inside units of work and raise
    :class:`ServiceError` subclasses; they never see Flask or HTTP.

    Notes
    -----
    ``rw_uow`` commits on success and rolls back on error. ``ro_uow`` refuses
    writes and leaves loaded objects usable after the block.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map a service error onto the API error rendered for it.

        ===========================================  ======
        Service error                                Status
        ===========================================  ======
        ``ValidationFailedError``                    422
        ``BusinessRuleError``                        400
        authentication / invalid token / refresh     401
        token issue / revocation / registration      500
        any other ``ServiceError``                   400
        ===========================================  ======

        :param exc: Exception raised within the service.
        :returns: The API error, or ``exc`` itself when it is not a service error.
        """
        for error_type, build in _TRANSLATIONS:
            if isinstance(exc, error_type):
                return build(exc)
        return exc
