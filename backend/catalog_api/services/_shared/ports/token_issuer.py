from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from catalog_api.services._shared.errors import InvalidTokenError

BEARER = "bearer"


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    Token handed to clients.

    :param access_token: Encoded bearer token.
    :param expires_in: Lifetime in seconds.
    :param token_type: Always ``"bearer"``.
    """

    access_token: str
    expires_in: int
    token_type: str = BEARER


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Decoded facts about an active token."""

    subject: str
    jti: str
    expires_at: datetime


class TokenIssuer(Protocol):
    """Port for the bearer token lifecycle: issued → active → revoked | expired."""

    def issue(self, subject: int | str) -> IssuedToken: ...

    def validate(self, token: str) -> TokenClaims: ...

    def revoke(self, token: str) -> None: ...

    def refresh(self, token: str) -> IssuedToken: ...


class StubTokenIssuer(TokenIssuer):
    """Deterministic token issuer used in unit tests."""

    def __init__(self, *, ttl: timedelta = timedelta(minutes=60)) -> None:
        self.ttl = ttl
        self._seq = 0
        self._issued: dict[str, TokenClaims] = {}
        self.revoked: set[str] = set()

    def issue(self, subject: int | str) -> IssuedToken:
        self._seq += 1
        jti = f"jti-{self._seq}"
        token = f"access.{subject}.{jti}"
        self._issued[token] = TokenClaims(
            subject=str(subject),
            jti=jti,
            expires_at=datetime.now(tz=UTC) + self.ttl,
        )
        return IssuedToken(access_token=token, expires_in=int(self.ttl.total_seconds()))

    def validate(self, token: str) -> TokenClaims:
        claims = self._issued.get(token)
        if claims is None or claims.jti in self.revoked:
            raise InvalidTokenError()
        if claims.expires_at <= datetime.now(tz=UTC):
            raise InvalidTokenError()
        return claims

    def revoke(self, token: str) -> None:
        self.revoked.add(self.validate(token).jti)

    def refresh(self, token: str) -> IssuedToken:
        claims = self.validate(token)
        self.revoke(token)
        return self.issue(claims.subject)
