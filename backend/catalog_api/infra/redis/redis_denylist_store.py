from __future__ import annotations

from datetime import UTC, datetime

import redis  # type: ignore[import-untyped]

DEFAULT_PREFIX = "deny:at:"


def seconds_until(expires_at: datetime, *, now: datetime | None = None) -> int:
    """Whole seconds left before ``expires_at``; never less than one."""
    current = now or datetime.now(UTC)
    return max(1, int((expires_at - current).total_seconds()))


class RedisTokenDenylistStore:
    """
    Revoked access-token ids kept in Redis.

    Each revoked ``jti`` becomes its own key whose TTL matches the token's
    remaining lifetime, so Redis drops the entry once the token could no
    longer be used anyway.
    """

    def __init__(self, client: redis.Redis, *, prefix: str = DEFAULT_PREFIX) -> None:
        self.client = client
        self.prefix = prefix

    def key_for(self, jti: str) -> str:
        return f"{self.prefix}{jti}"

    def is_revoked(self, jti: str) -> bool:
        return bool(self.client.exists(self.key_for(jti)))

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        # SET overwrites, so revoking twice only refreshes the TTL
        self.client.set(self.key_for(jti), "1", ex=seconds_until(expires_at))
