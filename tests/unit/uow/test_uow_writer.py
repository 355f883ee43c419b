"""Unit tests for :class:`SQLAlchemyUnitOfWork`."""

from __future__ import annotations

import pytest

from makeshort.models.user import User
from makeshort.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_clean_exit(self, session):
        with RWuow() as uow:
            user = UserFactory.build()
            uow.session.add(user)
        session.expire_all()
        assert session.get(User, user.id) is not None

    def test_rolls_back_when_block_raises(self, session):
        email = UserFactory.build().email
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.create(email=email, username="rollme", password_hash="h")
            raise RuntimeError("boom")
        assert uow.users.get_by_email(email) is None

    def test_repositories_share_the_session(self, session):
        with RWuow() as uow:
            assert uow.users.session is uow.urls.session
            assert uow.urls.session is uow.refresh_sessions.session
