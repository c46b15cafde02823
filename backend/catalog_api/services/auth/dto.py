from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from catalog_api.services._shared.ports.token_issuer import IssuedToken

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration (already field-validated).

    :param name: Display name.
    :type name: str
    :param email: Login email.
    :type email: str
    :param password: Raw password; hashed by the model.
    :type password: str
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public projection of a user; never carries the password hash."""

    id: int
    name: str
    email: str
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class RegisterOut:
    """
    Output DTO for registration.

    :param user: The created user.
    :type user: UserOut
    :param token: Token issued for the new user.
    :type token: IssuedToken
    """

    user: UserOut
    token: IssuedToken
