"""User model holding API credentials."""

from __future__ import annotations

from typing import NoReturn

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from catalog_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


def normalize_email(value: str) -> str:
    """Trim and lowercase ``value``; emails are compared in this form."""
    return value.strip().lower()


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account whose id is the subject of issued access tokens.

    Fields
    ------
    name : str
        Display name, trimmed.
    email : str
        Login, unique and stored normalized (see :func:`normalize_email`).
    password_hash : str
        Werkzeug hash; assign plain text through ``password``.
    """

    __tablename__ = "users"
    __repr_attrs__ = ("email",)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    @property
    def password(self) -> NoReturn:
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """Return ``True`` when ``raw`` matches the stored hash."""
        return bool(self.password_hash) and check_password_hash(self.password_hash, raw)

    @validates("email")
    def _validate_email(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Email is required.")
        email = normalize_email(value)
        local, at, domain = email.partition("@")
        # Full format validation happens in the request schema
        if not (local and at and domain):
            raise ValueError("Email format looks invalid.")
        return email

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()
