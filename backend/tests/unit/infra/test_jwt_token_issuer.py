"""Unit tests for the Flask-JWT-Extended token issuer adapter."""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
from catalog_api.infra.jwt.flask_jwt_token_issuer import JWTTokenIssuer
from catalog_api.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from catalog_api.services._shared.errors import (
    InvalidTokenError,
    TokenIssueError,
    TokenRevocationError,
)
from catalog_api.services._shared.ports import InMemoryDenylistStore
from flask_jwt_extended import decode_token
from redis.exceptions import ConnectionError as RedisConnectionError

from tests.helpers.auth import expired_token


@pytest.fixture()
def denylist():
    return InMemoryDenylistStore()


@pytest.fixture()
def issuer(app, denylist):
    return JWTTokenIssuer(denylist=denylist, expires=timedelta(minutes=60))


class _BrokenRedis(fakeredis.FakeRedis):
    def set(self, *args, **kwargs):
        raise RedisConnectionError("down")


def test_issue_encodes_string_subject(issuer):
    token = issuer.issue(42)

    assert token.token_type == "bearer"
    assert token.expires_in == 3600
    payload = decode_token(token.access_token)
    assert payload["sub"] == "42"
    assert payload["jti"]


def test_tokens_for_same_subject_differ(issuer):
    assert issuer.issue(1).access_token != issuer.issue(1).access_token


def test_validate_returns_claims(issuer):
    token = issuer.issue(5).access_token

    claims = issuer.validate(token)
    assert claims.subject == "5"
    assert claims.expires_at.tzinfo is not None


@pytest.mark.parametrize("bad", ["", "not-a-jwt", "a.b.c"])
def test_validate_rejects_garbage(issuer, bad):
    with pytest.raises(InvalidTokenError):
        issuer.validate(bad)


def test_validate_rejects_expired(issuer):
    with pytest.raises(InvalidTokenError):
        issuer.validate(expired_token(1))


def test_revoke_adds_jti_to_denylist(issuer, denylist):
    token = issuer.issue(3).access_token
    jti = issuer.validate(token).jti

    issuer.revoke(token)

    assert denylist.is_revoked(jti)
    with pytest.raises(InvalidTokenError):
        issuer.validate(token)


def test_refresh_revokes_old_token(issuer):
    old = issuer.issue(9).access_token

    new = issuer.refresh(old)

    assert new.access_token != old
    assert issuer.validate(new.access_token).subject == "9"
    with pytest.raises(InvalidTokenError):
        issuer.validate(old)


def test_revoke_maps_storage_failure(app):
    issuer = JWTTokenIssuer(
        denylist=RedisTokenDenylistStore(_BrokenRedis()),
        expires=timedelta(minutes=5),
    )
    token = issuer.issue(1).access_token

    with pytest.raises(TokenRevocationError):
        issuer.revoke(token)


class _NoIssueIssuer(JWTTokenIssuer):
    def issue(self, subject):
        raise TokenIssueError()


def test_refresh_keeps_old_token_when_issue_fails(issuer, denylist):
    old = issuer.issue(3).access_token
    failing = _NoIssueIssuer(denylist=denylist, expires=timedelta(minutes=5))

    with pytest.raises(TokenIssueError):
        failing.refresh(old)

    assert issuer.validate(old).subject == "3"
    assert len(denylist) == 0
