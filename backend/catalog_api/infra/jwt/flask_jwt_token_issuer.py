from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from catalog_api.services._shared.errors import (
    InvalidTokenError,
    TokenIssueError,
    TokenRevocationError,
)
from catalog_api.services._shared.ports import (
    IssuedToken,
    TokenClaims,
    TokenDenylistStore,
    TokenIssuer,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenIssuer(TokenIssuer):
    """
    Adapter for Flask-JWT-Extended.

    Tokens carry the user id as a string ``sub`` plus a random ``jti``, so two
    tokens for the same subject never compare equal. Revocation writes the
    ``jti`` into the denylist until the token's ``exp``.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    denylist: TokenDenylistStore
    expires: timedelta

    def issue(self, subject: int | str) -> IssuedToken:
        try:
            token = cast(str, create_access_token(identity=str(subject), expires_delta=self.expires))
        except (PyJWTError, JWTExtendedException, TypeError, ValueError) as exc:
            raise TokenIssueError() from exc
        return IssuedToken(access_token=token, expires_in=int(self.expires.total_seconds()))

    def validate(self, token: str) -> TokenClaims:
        try:
            payload = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc

        claims = TokenClaims(
            subject=str(payload["sub"]),
            jti=str(payload["jti"]),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )
        if self.denylist.is_revoked(claims.jti):
            raise InvalidTokenError()
        return claims

    def revoke(self, token: str) -> None:
        claims = self.validate(token)
        try:
            self.denylist.revoke_jti(jti=claims.jti, expires_at=claims.expires_at)
        except RedisError as exc:
            raise TokenRevocationError() from exc
        logger.info("Token revoked", extra={"user_id": claims.subject})

    def refresh(self, token: str) -> IssuedToken:
        claims = self.validate(token)
        # The old token stays valid until its replacement exists
        fresh = self.issue(claims.subject)
        self.revoke(token)
        return fresh
