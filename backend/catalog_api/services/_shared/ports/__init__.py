"""
catalog_api.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) that define the contracts for
token management.

Modules
-------
- :mod:`token_issuer`:
    Defines :class:`~.TokenIssuer`, the abstraction for issuing, validating,
    revoking and refreshing bearer tokens.

- :mod:`denylist_store`:
    Defines :class:`~.TokenDenylistStore`, the interface for revoked token ids.

Concrete adapters (Redis, flask-jwt-extended) live under ``catalog_api.infra``.
"""

from __future__ import annotations

from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .token_issuer import IssuedToken, StubTokenIssuer, TokenClaims, TokenIssuer

__all__ = [
    "TokenIssuer",
    "TokenClaims",
    "IssuedToken",
    "StubTokenIssuer",
    "TokenDenylistStore",
    "InMemoryDenylistStore",
]
