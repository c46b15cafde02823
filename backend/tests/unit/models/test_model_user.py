"""User model: credentials, email normalization and constraints."""

from __future__ import annotations

import pytest
from catalog_api.models.user import User, normalize_email
from sqlalchemy.exc import IntegrityError

from tests.factories.user import UserFactory


def _new_user(email: str = "ann@example.com", name: str = "Ann", password: str = "pw") -> User:
    user = User(email=email, name=name)
    user.password = password
    return user


class TestPassword:
    def test_stored_as_hash(self, session):
        user = _new_user(password="secret123")
        session.add(user)
        session.commit()

        assert user.password_hash != "secret123"
        assert user.verify_password("secret123") is True
        assert user.verify_password("secret124") is False

    def test_cannot_be_read_back(self):
        user = _new_user()
        with pytest.raises(AttributeError, match="write-only"):
            user.password  # noqa: B018

    @pytest.mark.parametrize("raw", ["", None])
    def test_blank_rejected(self, raw):
        user = User(email="ann@example.com", name="Ann")
        with pytest.raises(ValueError):
            user.password = raw

    def test_no_hash_never_verifies(self):
        assert User(email="x@example.com", name="X").verify_password("anything") is False


class TestFields:
    def test_email_stored_normalized(self, session):
        user = UserFactory(email="  Mixed.Case@Example.COM ")

        assert user.email == "mixed.case@example.com"
        assert normalize_email(" A@B.io ") == "a@b.io"

    def test_duplicate_email_violates_constraint(self, session):
        UserFactory(email="dup@example.com")

        session.add(_new_user(email="DUP@example.com", name="Other"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_name_trimmed(self):
        assert User(email="t@example.com", name="  Trim Me ").name == "Trim Me"

    @pytest.mark.parametrize(
        ("email", "name"),
        [("", "u"), ("not-an-email", "u"), ("@example.com", "u"), ("x@example.com", "   ")],
    )
    def test_invalid_values_rejected(self, email, name):
        with pytest.raises(ValueError):
            User(email=email, name=name)

    def test_single_label_domain_accepted(self):
        assert User(email="Ana@localhost", name="Ana").email == "ana@localhost"

    def test_timestamps_filled_by_database(self, session):
        user = UserFactory()

        assert user.created_at is not None
        assert user.updated_at is not None

    def test_repr_shows_email(self, session):
        user = UserFactory(email="repr@example.com")

        assert repr(user) == f"<User id={user.id} email='repr@example.com'>"
