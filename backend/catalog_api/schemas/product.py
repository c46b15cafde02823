"""Product and category schemas."""

from __future__ import annotations

from decimal import Decimal

from marshmallow import Schema, fields, validate

from .common import BaseSchema, WholeNumber, not_blank

NAME_REQUIRED = "O nome do produto é obrigatório."
PRICE_REQUIRED = "O preço do produto é obrigatório."
PRICE_NUMERIC = "O preço deve ser um valor numérico."
PRICE_MIN = "O preço deve ser maior que zero."
CATEGORY_REQUIRED = "A categoria é obrigatória."
CATEGORY_INTEGER = "O ID da categoria deve ser um número inteiro."
CATEGORY_MISSING = "A categoria selecionada não existe."


class CategorySchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)


class ProductSchema(Schema):
    """Public representation of a product with its category embedded."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    description = fields.String(allow_none=True)
    price = fields.Decimal(places=2, as_string=True, required=True)
    category_id = fields.Integer(required=True)
    category = fields.Nested(CategorySchema)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)


class ProductCreateSchema(BaseSchema):
    """Payload for creating a product.

    ``category_id`` existence is checked separately against the database and
    merged into the same error mapping by the endpoint.
    """

    name = fields.String(
        required=True,
        validate=[
            not_blank(NAME_REQUIRED),
            validate.Length(max=255, error="O nome do produto não pode ter mais de 255 caracteres."),
        ],
        error_messages={
            "required": NAME_REQUIRED,
            "null": NAME_REQUIRED,
            "invalid": "O nome do produto deve ser um texto.",
        },
    )
    description = fields.String(
        allow_none=True,
        error_messages={"invalid": "A descrição deve ser um texto."},
    )
    price = fields.Decimal(
        required=True,
        validate=validate.Range(min=Decimal("0.01"), error=PRICE_MIN),
        error_messages={
            "required": PRICE_REQUIRED,
            "null": PRICE_REQUIRED,
            "invalid": PRICE_NUMERIC,
            "special": PRICE_NUMERIC,
        },
    )
    category_id = WholeNumber(
        required=True,
        error_messages={
            "required": CATEGORY_REQUIRED,
            "null": CATEGORY_REQUIRED,
            "invalid": CATEGORY_INTEGER,
        },
    )


class ProductUpdateSchema(ProductCreateSchema):
    """Partial payload: every field optional, but present fields obey create rules.

    Load with ``partial=True`` so ``required`` is not enforced.
    """
