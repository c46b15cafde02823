"""Factory Boy definition for :class:`catalog_api.models.user.User`."""

from __future__ import annotations

import factory
from catalog_api.models.user import User
from werkzeug.security import generate_password_hash

from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """
    Build persisted :class:`catalog_api.models.user.User` instances.

    Notes
    -----
    - Pass ``password=...`` to control the plain text credential; only its
      hash reaches the database.
    """

    class Meta:
        model = User

    class Params:
        password = "Passw0rd!"

    id = None  # let autoincrement handle it
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password_hash = factory.LazyAttribute(lambda o: generate_password_hash(o.password))
