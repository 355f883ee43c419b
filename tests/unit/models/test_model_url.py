"""Unit tests for the :class:`ShortURL` model and shared mixins."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from makeshort.models.base import as_utc
from makeshort.models.url import ShortURL
from tests.factories.url import ShortURLFactory
from tests.factories.user import UserFactory


def test_defaults_and_timestamps(session):
    url = ShortURLFactory()
    session.refresh(url)
    assert url.redirect_count == 0
    assert url.created_at is not None
    assert url.updated_at is not None


def test_repr_shows_alias(session):
    url = ShortURLFactory(alias="hello")
    assert "alias='hello'" in repr(url)


def test_alias_unique_constraint(session):
    ShortURLFactory(alias="taken")
    owner = UserFactory()
    session.add(ShortURL(user_id=owner.id, long_url="https://x.io", alias="taken"))
    with pytest.raises(IntegrityError):
        session.flush()
    session.rollback()


def test_as_utc_treats_naive_values_as_utc():
    naive = datetime(2024, 1, 1, 12, 0)
    assert as_utc(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def test_as_utc_converts_other_zones():
    plus_two = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(plus_two) == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
