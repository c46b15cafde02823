"""Authentication endpoints using the service layer."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, request

from catalog_api.api.deps import (
    current_bearer_token,
    get_auth_service,
    require_auth,
    success_response,
    timing,
    validate_payload,
)
from catalog_api.core.errors import ValidationFailed
from catalog_api.core.extensions import limiter
from catalog_api.schemas import LoginSchema, RegisterSchema, TokenResponseSchema, UserSchema
from catalog_api.services._shared.errors import ValidationFailedError
from catalog_api.services.auth import AuthService, LoginIn, RegisterIn
from catalog_api.services.auth.service import EMAIL_TAKEN_MESSAGE

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()
token_schema = TokenResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _email_unique(service: AuthService):
    def check(data: dict[str, Any]) -> dict[str, list[str]]:
        email = data.get("email")
        if email and service.email_taken(email):
            return {"email": [EMAIL_TAKEN_MESSAGE]}
        return {}

    return check


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue an access token."""

    data = validate_payload(
        login_schema, request.get_json(silent=True), status=HTTPStatus.UNPROCESSABLE_ENTITY
    )
    token = get_auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return success_response(**token_schema.dump(token))


@bp.post("/register")
@timing
def register():
    """Register a new user and return it together with its first token."""

    service = get_auth_service()
    data = validate_payload(
        register_schema,
        request.get_json(silent=True),
        status=HTTPStatus.BAD_REQUEST,
        checks=[_email_unique(service)],
    )
    try:
        result = service.register(
            RegisterIn(name=data["name"], email=data["email"], password=data["password"])
        )
    except ValidationFailedError as exc:
        raise ValidationFailed(exc.errors, status_code=HTTPStatus.BAD_REQUEST) from exc

    return success_response(
        http_status=HTTPStatus.CREATED,
        message="Usuário registrado com sucesso!",
        user=user_schema.dump(result.user),
        **token_schema.dump(result.token),
    )


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the bearer token used for this request."""

    get_auth_service().logout(current_bearer_token())
    return success_response(message="Logout realizado com sucesso.")


@bp.post("/refresh")
@require_auth
@timing
def refresh():
    """Exchange the bearer token for a fresh one; the old token stops working."""

    token = get_auth_service().refresh(current_bearer_token())
    return success_response(**token_schema.dump(token))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user profile."""

    user = get_auth_service().me(current_bearer_token())
    return success_response(data=user_schema.dump(user))
