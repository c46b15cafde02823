"""Centralized JSON error handling for the API.

Every failure leaves the application as the same envelope used by successful
responses::

    {"success": false, "message": "...", "data": {...}, "request_id": "..."}

``data`` is present only when the error carries structured details, such as
the field-to-messages mapping of a validation failure.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from catalog_api.core.logger import ensure_request_id

log = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "Unauthenticated."
VALIDATION_MESSAGE = "Validation errors"


def _envelope(message: str, data: Any | None = None) -> dict[str, Any]:
    """Build the failure envelope, always attaching the correlation id."""
    body: dict[str, Any] = {"success": False, "message": message}
    if data is not None:
        body["data"] = data
    body["request_id"] = ensure_request_id()
    return body


def error_response(message: str, status: int, data: Any | None = None) -> tuple[Response, int]:
    """Return ``(response, status)`` carrying the failure envelope."""
    return jsonify(_envelope(message, data)), int(status)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier used in logs. Defaults to ``"bad_request"``.
    details : Any, optional
        Structured payload (e.g., validation messages) returned as ``data``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details

    def to_envelope(self) -> dict[str, Any]:
        """Serialize the error into the failure envelope."""
        return _envelope(self.message, self.details)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = UNAUTHENTICATED_MESSAGE) -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class ValidationFailed(APIError):
    """Field validation failure; the status code is chosen by each endpoint."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        *,
        status_code: int = HTTPStatus.UNPROCESSABLE_ENTITY,
        message: str = VALIDATION_MESSAGE,
    ) -> None:
        super().__init__(message, status_code=status_code, code="validation_error", details=errors)
        self.errors = errors


class ServerError(APIError):
    """500 with a client-safe message; the cause is logged, never returned."""

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
        )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error renders the ``{"success": false}`` envelope.
    - Service-layer errors are translated by ``BaseService.translate_exceptions``.
    - JWT failures (missing, malformed, expired, revoked) answer 401.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """
    from catalog_api.core.extensions import jwt
    from catalog_api.services._shared.base import BaseService
    from catalog_api.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "APIError: code=%s status=%s msg=%s",
            err.code,
            err.status_code,
            err.message,
            exc_info=err if err.status_code >= 500 else None,
        )
        return jsonify(err.to_envelope()), err.status_code

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return handle_api_error(translated)
        return handle_unexpected_error(err)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        log.warning("ValidationError on %s", request.path)
        return error_response(
            VALIDATION_MESSAGE,
            HTTPStatus.UNPROCESSABLE_ENTITY,
            err.normalized_messages(),
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        # Werkzeug may provide HTML-ish description; normalize for clients
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: status=%s detail=%s", status, message)
        return error_response(message, status)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError on %s", request.path, exc_info=True)
        return error_response("Resource conflict", HTTPStatus.CONFLICT)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, deadlocks, etc.
        log.error("OperationalError on %s", request.path, exc_info=True)
        return error_response("Service temporarily unavailable", HTTPStatus.SERVICE_UNAVAILABLE)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception on %s", request.path, exc_info=err)
        return error_response("Unexpected error", HTTPStatus.INTERNAL_SERVER_ERROR)

    # ------------------------------ JWT callbacks ------------------------------

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        log.warning("Missing bearer token: %s", reason)
        return error_response(UNAUTHENTICATED_MESSAGE, HTTPStatus.UNAUTHORIZED)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        log.warning("Invalid bearer token: %s", reason)
        return error_response(UNAUTHENTICATED_MESSAGE, HTTPStatus.UNAUTHORIZED)

    @jwt.expired_token_loader
    def _expired_token(_jwt_header: dict[str, Any], _jwt_payload: dict[str, Any]):
        log.warning("Expired bearer token")
        return error_response("Token has expired.", HTTPStatus.UNAUTHORIZED)

    @jwt.revoked_token_loader
    def _revoked_token(_jwt_header: dict[str, Any], _jwt_payload: dict[str, Any]):
        log.warning("Revoked bearer token")
        return error_response("Token has been revoked.", HTTPStatus.UNAUTHORIZED)
