"""Integration tests for infrastructure failures surfacing through the HTTP layer.

Failures are injected with ``monkeypatch`` below the endpoints; each response
must carry the endpoint's generic message and never the underlying error.
"""

from __future__ import annotations

from catalog_api.infra.jwt.flask_jwt_token_issuer import JWTTokenIssuer
from catalog_api.repositories.user import UserRepository
from catalog_api.services._shared.errors import TokenIssueError
from catalog_api.services._shared.ports import InMemoryDenylistStore
from catalog_api.services.products import ProductService
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import SQLAlchemyError

from tests.factories.catalog import ProductFactory
from tests.helpers.assertions import assert_failure

PRODUCTS_URL = "/api/v1/products"


def _explode(*args, **kwargs):
    raise RuntimeError("storage exploded")


class TestProductFallbacks:
    def test_list(self, client, auth_header, monkeypatch) -> None:
        monkeypatch.setattr(ProductService, "list_products", _explode)

        body = assert_failure(client.get(PRODUCTS_URL, headers=auth_header), 500)
        assert body["message"] == "Erro ao buscar produtos."

    def test_get(self, client, auth_header, monkeypatch) -> None:
        monkeypatch.setattr(ProductService, "get_product", _explode)

        resp = client.get(f"{PRODUCTS_URL}/1", headers=auth_header)
        assert_failure(resp, 500, "Erro ao buscar produto.")

    def test_search(self, client, auth_header, monkeypatch) -> None:
        monkeypatch.setattr(ProductService, "get_product_by_name", _explode)

        resp = client.get(f"{PRODUCTS_URL}/search", query_string={"name": "x"}, headers=auth_header)
        assert_failure(resp, 500, "Erro ao buscar produto pelo nome.")

    def test_create_answers_400(self, client, auth_header, category, monkeypatch) -> None:
        monkeypatch.setattr(ProductService, "create_product", _explode)

        resp = client.post(
            PRODUCTS_URL,
            json={"name": "Mesa", "price": 10, "category_id": category.id},
            headers=auth_header,
        )
        body = assert_failure(resp, 400, "Erro ao criar produto.")
        assert "exploded" not in resp.get_data(as_text=True)
        assert "data" not in body

    def test_update_answers_400(self, client, auth_header, monkeypatch) -> None:
        product = ProductFactory()
        monkeypatch.setattr(ProductService, "update_product", _explode)

        resp = client.patch(f"{PRODUCTS_URL}/{product.id}", json={"price": 5}, headers=auth_header)
        assert_failure(resp, 400, "Erro ao atualizar produto.")

    def test_delete(self, client, auth_header, monkeypatch) -> None:
        product = ProductFactory()
        monkeypatch.setattr(ProductService, "delete_product", _explode)

        resp = client.delete(f"{PRODUCTS_URL}/{product.id}", headers=auth_header)
        assert_failure(resp, 500, "Erro ao excluir produto.")


class TestAuthFailures:
    def test_register_persistence_failure(self, client, monkeypatch) -> None:
        def _db_down(self, **kwargs):
            raise SQLAlchemyError("database is gone")

        monkeypatch.setattr(UserRepository, "create", _db_down)

        resp = client.post(
            "/api/v1/auth/register",
            json={
                "name": "Ana Souza",
                "email": "ana@example.com",
                "password": "secret123",
                "password_confirmation": "secret123",
            },
        )
        assert_failure(resp, 500, "Falha ao registrar usuário.")
        assert "database is gone" not in resp.get_data(as_text=True)

    def test_login_token_failure(self, client, user, monkeypatch) -> None:
        def _no_token(self, subject):
            raise TokenIssueError()

        monkeypatch.setattr(JWTTokenIssuer, "issue", _no_token)

        resp = client.post(
            "/api/v1/auth/login", json={"email": user.email, "password": "secret123"}
        )
        assert_failure(resp, 500, "Não foi possível gerar o token de acesso.")

    def test_logout_revocation_failure(self, client, auth_header, monkeypatch) -> None:
        def _store_down(self, *, jti, expires_at):
            raise RedisConnectionError("down")

        with monkeypatch.context() as patched:
            patched.setattr(InMemoryDenylistStore, "revoke_jti", _store_down)
            resp = client.post("/api/v1/auth/logout", headers=auth_header)

        assert_failure(resp, 500, "Falha ao fazer logout, por favor tente novamente.")
        assert client.get("/api/v1/auth/me", headers=auth_header).status_code == 200


def test_register_accepts_single_label_domain(client) -> None:
    resp = client.post(
        "/api/v1/auth/register",
        json={
            "name": "Ana Souza",
            "email": "Ana@localhost",
            "password": "secret123",
            "password_confirmation": "secret123",
        },
    )

    assert resp.status_code == 201
    assert resp.get_json()["user"]["email"] == "ana@localhost"
