"""User repository: lookups by email and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from catalog_api.models.user import User, normalize_email
from catalog_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only access to :class:`User`.

    Emails are normalized before every lookup, so callers may pass them as
    typed by the client. Tokens are none of this class's business.
    """

    model = User

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == normalize_email(email))
        return self.session.execute(stmt).first() is not None

    def create(self, *, name: str, email: str, password: str) -> User:
        """Insert a user; ``password`` is hashed by the model.

        :raises sqlalchemy.exc.IntegrityError: If the email is already taken.
        """
        user = User(name=name, email=email)
        user.password = password
        return self.add(user)

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user owning ``email`` if ``password`` matches, else ``None``.

        Unknown emails and wrong passwords are indistinguishable to callers.
        """
        user = self.get_by_email(email)
        if user is None or not user.verify_password(password):
            return None
        return user
