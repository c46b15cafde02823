"""Integration tests for health, error envelopes and request correlation."""

from __future__ import annotations

import pytest

from tests.helpers.assertions import assert_failure


@pytest.mark.parametrize("path", ["/api/v1/", "/api/v1/health"])
def test_health_endpoint(client, path) -> None:
    resp = client.get(path)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert "version" in body


def test_unknown_route_uses_failure_envelope(client) -> None:
    resp = client.get("/api/v1/does-not-exist")

    assert_failure(resp, 404, "Route '/api/v1/does-not-exist' not found")


def test_method_not_allowed_uses_failure_envelope(client) -> None:
    assert_failure(client.delete("/api/v1/auth/login"), 405)


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-42"})

    assert resp.headers["X-Request-ID"] == "req-42"


def test_request_id_generated_per_request(client) -> None:
    first = client.get("/api/v1/health").headers["X-Request-ID"]
    second = client.get("/api/v1/health").headers["X-Request-ID"]

    assert first and second
    assert first != second


def test_error_envelope_carries_request_id(client) -> None:
    resp = client.get("/api/v1/auth/me", headers={"X-Request-ID": "req-err"})

    body = assert_failure(resp, 401)
    assert body["request_id"] == "req-err"
    assert resp.headers["X-Request-ID"] == "req-err"


def test_cors_exposes_request_id(client) -> None:
    resp = client.get("/api/v1/health", headers={"Origin": "http://localhost:5173"})

    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"
