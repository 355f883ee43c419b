"""Factory Boy base wired to the per-test SQLAlchemy session."""

from __future__ import annotations

import factory

#: Salt shared by the test app config and the user factory
TEST_HASH_SALT = "test-salt"


class SQLAlchemySession:
    """Holder for the session the ``session`` fixture yields."""

    _session = None

    @classmethod
    def set(cls, session) -> None:
        cls._session = session

    @classmethod
    def get(cls):
        """:raises RuntimeError: If a factory runs before the fixture wiring."""
        if cls._session is None:
            raise RuntimeError("Factory session not set; request the 'session' fixture.")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Persist through the transactional test session."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        # Rows must survive a service-level rollback; commit only releases
        # the per-test SAVEPOINT.
        sqlalchemy_session_persistence = "commit"
