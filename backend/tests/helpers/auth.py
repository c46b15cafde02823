"""Authentication helpers for tests."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token


def issue_token(identity: int, expires_delta: timedelta | None = None) -> str:
    """Generate a JWT for ``identity``.

    Parameters
    ----------
    identity:
        User id encoded as the token subject.
    expires_delta:
        Optional expiry delta. If ``None``, the default expiry is used.

    Returns
    -------
    str
        Encoded JWT string.
    """

    return create_access_token(identity=str(identity), expires_delta=expires_delta)


def expired_token(identity: int) -> str:
    """Return an already expired JWT for ``identity``."""

    return create_access_token(identity=str(identity), expires_delta=timedelta(seconds=-1))


def bearer(token: str) -> dict[str, str]:
    """Return the ``Authorization`` header for ``token``."""

    return {"Authorization": f"Bearer {token}"}
