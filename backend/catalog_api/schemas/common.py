"""Common Marshmallow schemas and validators shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields


class BaseSchema(Schema):
    """Base for input payloads: unknown keys are dropped, not rejected."""

    class Meta:
        unknown = EXCLUDE


def not_blank(message: str):
    """Return a validator rejecting strings that are empty once trimmed."""

    def _check(value: Any) -> None:
        if isinstance(value, str) and not value.strip():
            raise ValidationError(message)

    return _check


class WholeNumber(fields.Integer):
    """Integer field that rejects fractional numbers instead of truncating them.

    Integral strings such as ``"3"`` are still accepted.
    """

    def _validated(self, value: Any) -> int | None:
        if isinstance(value, float) and not value.is_integer():
            raise self.make_error("invalid")
        if isinstance(value, str) and "." in value:
            raise self.make_error("invalid")
        return super()._validated(value)
