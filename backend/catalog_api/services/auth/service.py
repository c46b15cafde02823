from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog_api.models.user import User
from catalog_api.repositories.user import UserRepository
from catalog_api.services._shared.base import BaseService
from catalog_api.services._shared.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    RegistrationError,
    TokenError,
    TokenIssueError,
    TokenRefreshError,
    TokenRevocationError,
    ValidationFailedError,
    violates,
)
from catalog_api.services._shared.ports.token_issuer import IssuedToken, TokenIssuer
from catalog_api.services.auth.dto import LoginIn, RegisterIn, RegisterOut, UserOut

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "The email has already been taken."


def user_to_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / logout / refresh / me).

    Tokens are issued and revoked through a pluggable :class:`TokenIssuer`;
    users are read and written through units of work.
    """

    def __init__(self, *, token_issuer: TokenIssuer) -> None:
        """
        Initialize the service with its dependencies.

        :param token_issuer: Adapter for issuing, validating and revoking tokens.
        """
        super().__init__()
        self.tokens = token_issuer

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def email_taken(self, email: str) -> bool:
        """Return ``True`` when ``email`` already belongs to a user."""
        with self.ro_uow() as uow:
            return uow.users.exists_by_email(email)

    def register(self, dto: RegisterIn) -> RegisterOut:
        """
        Create a user and issue their first token in one transaction.

        If issuing the token fails, the user row is rolled back with it.

        :raises ValidationFailedError: If the email was taken concurrently.
        :raises RegistrationError: On persistence, model or token failure.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.create(name=dto.name, email=dto.email, password=dto.password)
                token = self.tokens.issue(user.id)
                out = user_to_out(user)
        except IntegrityError as exc:
            if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                raise ValidationFailedError({"email": [EMAIL_TAKEN_MESSAGE]}) from exc
            logger.error("Registration failed", exc_info=exc)
            raise RegistrationError() from exc
        except (SQLAlchemyError, TokenIssueError, ValueError) as exc:
            logger.error("Registration failed", exc_info=exc)
            raise RegistrationError() from exc

        logger.info("User registered", extra={"user_id": out.id})
        return RegisterOut(user=out, token=token)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> IssuedToken:
        """
        Authenticate credentials and issue a token.

        :raises InvalidCredentialsError: Unknown email or wrong password.
        :raises TokenIssueError: If the issuer fails.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                logger.warning("Login rejected")
                raise InvalidCredentialsError()
            user_id = user.id

        try:
            token = self.tokens.issue(user_id)
        except TokenIssueError:
            logger.error("Token issuance failed", extra={"user_id": user_id}, exc_info=True)
            raise
        logger.info("User logged in", extra={"user_id": user_id})
        return token

    # ------------------------------------------------------------------ #
    # Logout / refresh
    # ------------------------------------------------------------------ #

    def logout(self, token: str) -> None:
        """
        Revoke ``token`` until its natural expiry.

        :raises TokenRevocationError: If the token cannot be invalidated.
        """
        try:
            self.tokens.revoke(token)
        except TokenRevocationError:
            logger.error("Logout failed", exc_info=True)
            raise
        except TokenError as exc:
            logger.error("Logout failed", exc_info=exc)
            raise TokenRevocationError() from exc

    def refresh(self, token: str) -> IssuedToken:
        """
        Exchange an active token for a new one; the old token is revoked.

        :raises TokenRefreshError: If the token cannot be refreshed.
        """
        try:
            return self.tokens.refresh(token)
        except TokenError as exc:
            logger.warning("Token refresh failed: %s", exc.message)
            raise TokenRefreshError() from exc

    # ------------------------------------------------------------------ #
    # Current user
    # ------------------------------------------------------------------ #

    def me(self, token: str) -> UserOut:
        """
        Return the user named by the token's subject.

        :raises InvalidTokenError: If the token is not active or the user is gone.
        """
        claims = self.tokens.validate(token)
        if not claims.subject.isdigit():
            raise InvalidTokenError()
        with self.ro_uow() as uow:
            user = uow.users.get(int(claims.subject))
            if user is None:
                logger.warning("Token subject not found", extra={"user_id": claims.subject})
                raise InvalidTokenError()
            return user_to_out(user)
