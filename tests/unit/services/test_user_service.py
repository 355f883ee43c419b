# tests/unit/services/test_user_service.py
from __future__ import annotations

from datetime import timedelta

import pytest

from makeshort.models.url import ShortURL
from makeshort.services._shared.errors import (
    AuthorizationError,
    NotFoundError,
    SessionNotFoundError,
)
from makeshort.services._shared.ports import InMemorySessionStore
from makeshort.services.users.service import UserService
from tests.factories.url import ShortURLFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore(ttl=timedelta(hours=1))


@pytest.fixture()
def service(store) -> UserService:
    return UserService(session_store=store)


def test_get_user_returns_public_projection(service):
    user = UserFactory(email="pub@example.com", username="pub")
    out = service.get_user(user.id)
    assert (out.id, out.email, out.username) == (user.id, "pub@example.com", "pub")
    assert not hasattr(out, "password_hash")


def test_get_missing_user(service):
    with pytest.raises(NotFoundError):
        service.get_user(987654)


def test_delete_removes_urls_and_sessions(service, store, session):
    user = UserFactory()
    other = UserFactory()
    ShortURLFactory(owner=user)
    ShortURLFactory(owner=user)
    kept = ShortURLFactory(owner=other)
    store.create(refresh_token="mine-1", user_id=user.id)
    store.create(refresh_token="mine-2", user_id=user.id)
    store.create(refresh_token="theirs", user_id=other.id)
    user_id, kept_id = user.id, kept.id

    service.delete_user(user_id, user_id)

    with pytest.raises(NotFoundError):
        service.get_user(user_id)
    remaining = session.query(ShortURL).all()
    assert [u.id for u in remaining] == [kept_id]
    for token in ("mine-1", "mine-2"):
        with pytest.raises(SessionNotFoundError):
            store.get(token)
    assert store.get("theirs").user_id == other.id


def test_delete_someone_else_is_forbidden(service):
    victim = UserFactory()
    with pytest.raises(AuthorizationError):
        service.delete_user(UserFactory().id, victim.id)
    assert service.get_user(victim.id).id == victim.id


def test_delete_missing_user(service):
    with pytest.raises(NotFoundError):
        service.delete_user(55555, 55555)
