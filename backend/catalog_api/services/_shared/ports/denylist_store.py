"""Port for revoked access-token ids, plus the process-local default."""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Protocol


class TokenDenylistStore(Protocol):
    """
    Revoked access tokens, keyed by ``jti``.

    An entry only needs to outlive the token it denies; ``revoke_jti`` may be
    called more than once for the same id.
    """

    def is_revoked(self, jti: str) -> bool: ...

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None: ...


class InMemoryDenylistStore:
    """Thread-safe ``jti -> expiry`` map used when no Redis is configured.

    Expired ids are dropped lazily on read, so the map stays bounded by the
    number of live revoked tokens.
    """

    def __init__(self) -> None:
        self._expiry_by_jti: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            self._drop_expired()
            return jti in self._expiry_by_jti

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._expiry_by_jti[jti] = expires_at

    def __len__(self) -> int:
        with self._lock:
            self._drop_expired()
            return len(self._expiry_by_jti)

    def _drop_expired(self) -> None:
        now = datetime.now(UTC)
        self._expiry_by_jti = {
            jti: expires for jti, expires in self._expiry_by_jti.items() if expires > now
        }
