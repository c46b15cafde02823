"""Unit tests for UserRepository."""

import pytest
from catalog_api.repositories.user import UserRepository
from sqlalchemy.exc import IntegrityError

from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_create_and_get_user(self, repo, session):
        """Create a user and fetch it by email to verify retrieval."""
        u = repo.create(name="Alice", email="Alice@Example.com", password="secret123")
        session.commit()

        fetched = repo.get_by_email("  ALICE@example.com ")
        assert fetched is not None
        assert fetched.id == u.id
        assert fetched.name == "Alice"
        assert fetched.verify_password("secret123")

    def test_exists_by_email(self, repo):
        """Return existence flags for known and unknown email addresses."""
        UserFactory(email="bob@example.com")

        assert repo.exists_by_email("BOB@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_authenticate_valid_and_invalid(self, repo):
        """Authenticate with correct credentials and reject invalid attempts."""
        UserFactory(email="auth@example.com", password="strongpass")

        assert repo.authenticate("auth@example.com", "strongpass") is not None
        assert repo.authenticate("auth@example.com", "wrongpass") is None
        assert repo.authenticate("nope@example.com", "strongpass") is None

    def test_create_duplicate_email_raises(self, repo, session):
        UserFactory(email="dup@example.com")

        with pytest.raises(IntegrityError):
            repo.create(name="Again", email="DUP@example.com", password="secret123")
        session.rollback()

    def test_list_is_ordered_by_id(self, repo):
        first = UserFactory(name="Zoe")
        second = UserFactory(name="Adam")

        assert [u.id for u in repo.list()] == [first.id, second.id]
