"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import ValidationError, fields, validate, validates_schema

from .common import BaseSchema, not_blank

PASSWORD_MIN = 6


class RegisterSchema(BaseSchema):
    """Input payload for account registration.

    ``password_confirmation`` is compared against ``password`` and then dropped;
    a mismatch is reported under ``password``.
    """

    name = fields.String(
        required=True,
        validate=[
            not_blank("The name field is required."),
            validate.Length(min=2, max=100, error="The name field must be between 2 and 100 characters."),
        ],
        error_messages={
            "required": "The name field is required.",
            "null": "The name field is required.",
            "invalid": "The name field must be a string.",
        },
    )
    email = fields.Email(
        required=True,
        validate=validate.Length(max=100, error="The email field must not be greater than 100 characters."),
        error_messages={
            "required": "The email field is required.",
            "null": "The email field is required.",
            "invalid": "The email field must be a valid email address.",
        },
    )
    password = fields.String(
        required=True,
        validate=validate.Length(
            min=PASSWORD_MIN, error="The password field must be at least 6 characters."
        ),
        error_messages={
            "required": "The password field is required.",
            "null": "The password field is required.",
            "invalid": "The password field must be a string.",
        },
    )

    @validates_schema(pass_original=True, skip_on_field_errors=False)
    def check_confirmation(self, data: dict[str, Any], original: Any, **_: Any) -> None:
        if not isinstance(original, dict):
            return
        password = original.get("password")
        if isinstance(password, str) and password and original.get("password_confirmation") != password:
            raise ValidationError(
                "The password field confirmation does not match.", field_name="password"
            )


class LoginSchema(BaseSchema):
    """Input payload for authenticating a user."""

    email = fields.Email(
        required=True,
        error_messages={
            "required": "The email field is required.",
            "null": "The email field is required.",
            "invalid": "The email field must be a valid email address.",
        },
    )
    password = fields.String(
        required=True,
        validate=validate.Length(
            min=PASSWORD_MIN, error="The password field must be at least 6 characters."
        ),
        error_messages={
            "required": "The password field is required.",
            "null": "The password field is required.",
            "invalid": "The password field must be a string.",
        },
    )


class TokenResponseSchema(BaseSchema):
    """Response payload containing an access token."""

    access_token = fields.String(required=True)
    token_type = fields.String(dump_default="bearer")
    expires_in = fields.Integer(required=True)
