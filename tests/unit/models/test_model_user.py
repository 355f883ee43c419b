"""Unit tests for the :class:`User` model."""

from __future__ import annotations

import pytest

from makeshort.models.user import User, normalize_email
from tests.factories.url import ShortURLFactory
from tests.factories.user import UserFactory


def test_email_is_normalized_on_assignment():
    user = User(email="  Alice@Example.COM ", username="alice", password_hash="x")
    assert user.email == "alice@example.com"


def test_normalize_email_helper():
    assert normalize_email(" Bob@Mail.Org") == "bob@mail.org"


@pytest.mark.parametrize("bad", ["", "no-at-sign", "user@nodot"])
def test_invalid_email_rejected(bad):
    with pytest.raises(ValueError):
        User(email=bad, username="u", password_hash="x")


def test_username_is_trimmed_and_required():
    assert User(email="a@b.io", username="  carol ", password_hash="x").username == "carol"
    with pytest.raises(ValueError, match="Username is required"):
        User(email="a@b.io", username="   ", password_hash="x")


def test_repr_omits_password_hash(session):
    user = UserFactory(username="dave")
    text = repr(user)
    assert "dave" in text
    assert user.password_hash not in text


def test_user_owns_urls(session):
    user = UserFactory()
    ShortURLFactory(owner=user)
    ShortURLFactory(owner=user)
    session.refresh(user)
    assert len(user.urls) == 2
    assert all(url.user_id == user.id for url in user.urls)
