"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import verify_jwt_in_request
from marshmallow import Schema, ValidationError
from werkzeug.exceptions import HTTPException

from catalog_api.core.errors import APIError, ValidationFailed
from catalog_api.core.extensions import get_denylist
from catalog_api.infra.jwt.flask_jwt_token_issuer import JWTTokenIssuer
from catalog_api.services._shared.errors import ServiceError
from catalog_api.services.auth import AuthService
from catalog_api.services.products import ProductService

F = TypeVar("F", bound=Callable[..., Any])

#: Extra per-field checks run after schema loading: ``loaded data -> field errors``.
FieldCheck = Callable[[Mapping[str, Any]], Mapping[str, list[str]]]


# ------------------------------- Services ------------------------------------


def get_auth_service() -> AuthService:
    """Build the auth service wired to the JWT issuer and the app's denylist."""

    issuer = JWTTokenIssuer(
        denylist=get_denylist(),
        expires=current_app.config["JWT_ACCESS_TOKEN_EXPIRES"],
    )
    return AuthService(token_issuer=issuer)


def get_product_service() -> ProductService:
    return ProductService()


# ------------------------------- Auth ----------------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, non-revoked JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_bearer_token() -> str:
    """Return the raw token from ``Authorization: Bearer <token>``."""

    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


# ------------------------------- Validation ----------------------------------


def validate_payload(
    schema: Schema,
    payload: Any,
    *,
    status: int,
    partial: bool = False,
    checks: Iterable[FieldCheck] = (),
) -> dict[str, Any]:
    """Load ``payload`` with ``schema`` and run database-backed ``checks``.

    Every failing rule contributes to one field → messages mapping; if it is
    not empty, :class:`ValidationFailed` is raised with the endpoint's
    ``status``. ``checks`` only see fields that passed the schema.
    """

    errors: dict[str, list[str]] = {}
    try:
        data = schema.load(payload if payload is not None else {}, partial=partial)
    except ValidationError as err:
        data = err.valid_data if isinstance(err.valid_data, dict) else {}
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        for field, field_messages in messages.items():
            errors[field] = list(field_messages) if isinstance(field_messages, list) else [str(field_messages)]

    for check in checks:
        for field, field_messages in check(data).items():
            errors.setdefault(field, []).extend(field_messages)

    if errors:
        raise ValidationFailed(errors, status_code=status)
    return data


# ------------------------------- Responses -----------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def success_response(*, http_status: int = 200, **fields: Any) -> Response:
    """Return the ``{"success": true, ...}`` envelope.

    Every keyword except ``http_status`` becomes a body field, so a ``status``
    key can be part of the payload.
    """

    return json_response({"success": True, **fields}, status=http_status)


def fallback_error(message: str, *, status: int = 500) -> Callable[[F], F]:
    """Turn unexpected exceptions into an endpoint-specific failure envelope.

    Errors that already have a handler (API, service and HTTP errors) pass
    through untouched; anything else is logged with its traceback and answered
    with ``message``.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            try:
                return func(*args, **kwargs)
            except (APIError, ServiceError, HTTPException):
                raise
            except Exception as exc:
                current_app.logger.error(
                    "Unexpected error in %s", request.endpoint, exc_info=exc
                )
                raise APIError(message, status_code=status, code="unexpected_error") from exc

        return wrapper  # type: ignore[return-value]

    return decorator


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
