"""Factory Boy definition for :class:`makeshort.models.user.User`."""

from __future__ import annotations

import factory

from makeshort.infra.crypto.sha256_hasher import SaltedSHA256Hasher
from makeshort.models.user import User
from tests.factories import TEST_HASH_SALT, BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`makeshort.models.user.User` instances.

    Notes
    -----
    - ``password`` is a factory parameter; only its salted hash is stored,
      matching what the test app's hasher produces.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    password_hash = factory.LazyAttribute(
        lambda o: SaltedSHA256Hasher(salt=TEST_HASH_SALT).hash(o.password)
    )
