"""Product CRUD endpoints; every route requires a bearer token."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, request

from catalog_api.api.deps import (
    fallback_error,
    get_product_service,
    require_auth,
    success_response,
    timing,
    validate_payload,
)
from catalog_api.core.errors import APIError, NotFound
from catalog_api.schemas import (
    CATEGORY_MISSING,
    ProductCreateSchema,
    ProductSchema,
    ProductUpdateSchema,
)
from catalog_api.services.products import ProductService

bp = Blueprint("products", __name__, url_prefix="/products")

create_schema = ProductCreateSchema()
update_schema = ProductUpdateSchema()
product_schema = ProductSchema()
products_schema = ProductSchema(many=True)


def _category_exists(service: ProductService):
    def check(data: dict[str, Any]) -> dict[str, list[str]]:
        category_id = data.get("category_id")
        if category_id is not None and not service.category_exists(category_id):
            return {"category_id": [CATEGORY_MISSING]}
        return {}

    return check


@bp.get("")
@require_auth
@fallback_error("Erro ao buscar produtos.")
@timing
def list_products():
    """Return every product with its category."""

    products = get_product_service().list_products()
    return success_response(data=products_schema.dump(products))


@bp.post("")
@require_auth
@fallback_error("Erro ao criar produto.", status=HTTPStatus.BAD_REQUEST)
@timing
def create_product():
    """Validate the payload and create a product."""

    service = get_product_service()
    data = validate_payload(
        create_schema,
        request.get_json(silent=True),
        status=HTTPStatus.UNPROCESSABLE_ENTITY,
        checks=[_category_exists(service)],
    )
    product = service.create_product(data)
    return success_response(
        http_status=HTTPStatus.CREATED,
        message="Produto criado com sucesso.",
        data=product_schema.dump(product),
    )


@bp.get("/search")
@require_auth
@fallback_error("Erro ao buscar produto pelo nome.")
@timing
def search_product():
    """Find a product by exact name, ignoring case."""

    name = (request.args.get("name") or "").strip()
    if not name:
        raise APIError("Parâmetro 'name' é obrigatório.", status_code=HTTPStatus.BAD_REQUEST)

    product = get_product_service().get_product_by_name(name)
    if product is None:
        raise NotFound("Produto não encontrado.")
    return success_response(data=product_schema.dump(product))


@bp.get("/<int:product_id>")
@require_auth
@fallback_error("Erro ao buscar produto.")
@timing
def get_product(product_id: int):
    product = get_product_service().get_product(product_id)
    if product is None:
        raise NotFound("Produto não encontrado.")
    return success_response(data=product_schema.dump(product))


@bp.route("/<int:product_id>", methods=["PUT", "PATCH"])
@require_auth
@fallback_error("Erro ao atualizar produto.", status=HTTPStatus.BAD_REQUEST)
@timing
def update_product(product_id: int):
    """Apply a partial update; omitted fields keep their values."""

    service = get_product_service()
    data = validate_payload(
        update_schema,
        request.get_json(silent=True),
        status=HTTPStatus.UNPROCESSABLE_ENTITY,
        partial=True,
        checks=[_category_exists(service)],
    )
    if not data:
        raise APIError("Nenhum dado fornecido para atualização.", status_code=HTTPStatus.BAD_REQUEST)

    product = service.update_product(product_id, data)
    if product is None:
        raise NotFound("Produto não encontrado para atualização.")
    return success_response(
        message="Produto atualizado com sucesso.",
        data=product_schema.dump(product),
    )


@bp.delete("/<int:product_id>")
@require_auth
@fallback_error("Erro ao excluir produto.")
@timing
def delete_product(product_id: int):
    if not get_product_service().delete_product(product_id):
        raise NotFound("Produto não encontrado ou não pôde ser excluído.")
    return success_response(message="Produto excluído com sucesso.")
