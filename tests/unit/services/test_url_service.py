# tests/unit/services/test_url_service.py
from __future__ import annotations

import re

import pytest

from makeshort.services._shared.errors import (
    AliasAlreadyExistsError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from makeshort.services.urls.dto import URLCreateIn, URLOut, URLUpdateIn
from makeshort.services.urls.service import URLService, validate_alias, validate_long_url
from tests.factories.url import ShortURLFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> URLService:
    return URLService(alias_length=6)


class TestValidators:
    @pytest.mark.parametrize(
        "value", ["https://example.com", "http://localhost:8080/path?q=1", "  https://a.io/x  "]
    )
    def test_accepts_absolute_http_urls(self, value):
        assert validate_long_url(value) == value.strip()

    @pytest.mark.parametrize("value", ["", "example.com", "/relative", "ftp://files.example.com"])
    def test_rejects_other_urls(self, value):
        with pytest.raises(ValidationError):
            validate_long_url(value)

    @pytest.mark.parametrize("value", ["a", "My_Alias-1", "x" * 32])
    def test_accepts_aliases(self, value):
        assert validate_alias(value) == value

    @pytest.mark.parametrize("value", ["has space", "slash/alias", "x" * 33, "emoji☺"])
    def test_rejects_aliases(self, value):
        with pytest.raises(ValidationError):
            validate_alias(value)


class TestCreate:
    def test_with_custom_alias(self, service):
        owner = UserFactory()
        out = service.create(owner.id, URLCreateIn(long_url="https://example.com/a", alias="mine"))
        assert isinstance(out, URLOut)
        assert out.alias == "mine"
        assert out.owner_id == owner.id
        assert out.redirect_count == 0

    def test_generates_alias_when_missing(self, service):
        owner = UserFactory()
        out = service.create(owner.id, URLCreateIn(long_url="https://example.com/b"))
        assert re.fullmatch(r"[a-z0-9]{6}", out.alias)

    def test_alias_length_is_configurable(self):
        owner = UserFactory()
        out = URLService(alias_length=10).create(owner.id, URLCreateIn(long_url="https://e.io"))
        assert len(out.alias) == 10

    def test_taken_alias_conflicts(self, service):
        ShortURLFactory(alias="taken")
        with pytest.raises(AliasAlreadyExistsError):
            service.create(UserFactory().id, URLCreateIn(long_url="https://e.io", alias="taken"))

    def test_invalid_input(self, service):
        owner = UserFactory()
        with pytest.raises(ValidationError):
            service.create(owner.id, URLCreateIn(long_url="notaurl"))
        with pytest.raises(ValidationError):
            service.create(owner.id, URLCreateIn(long_url="https://e.io", alias="bad alias"))


class TestUpdate:
    def test_owner_updates_alias_and_target(self, service):
        url = ShortURLFactory(alias="old")
        out = service.update(
            url.user_id, url.id, URLUpdateIn(long_url="https://new.example", alias="new")
        )
        assert out.alias == "new"
        assert out.long_url == "https://new.example"

    def test_partial_update_keeps_other_field(self, service):
        url = ShortURLFactory(alias="stay", long_url="https://keep.example")
        out = service.update(url.user_id, url.id, URLUpdateIn(alias="moved"))
        assert out.long_url == "https://keep.example"

    def test_non_owner_is_forbidden(self, service):
        url = ShortURLFactory(alias="theirs")
        intruder = UserFactory()
        with pytest.raises(AuthorizationError):
            service.update(intruder.id, url.id, URLUpdateIn(alias="stolen"))

    def test_missing_url(self, service):
        with pytest.raises(NotFoundError):
            service.update(UserFactory().id, 424242, URLUpdateIn(alias="x"))

    def test_taken_alias_conflicts(self, service):
        ShortURLFactory(alias="first")
        url = ShortURLFactory(alias="second")
        with pytest.raises(AliasAlreadyExistsError):
            service.update(url.user_id, url.id, URLUpdateIn(alias="first"))


class TestDelete:
    def test_owner_deletes(self, service):
        url = ShortURLFactory()
        service.delete(url.user_id, url.id)
        with pytest.raises(NotFoundError):
            service.delete(url.user_id, url.id)

    def test_non_owner_is_forbidden_and_row_survives(self, service):
        url = ShortURLFactory()
        owner_id, url_id = url.user_id, url.id
        with pytest.raises(AuthorizationError):
            service.delete(UserFactory().id, url_id)
        assert [u.id for u in service.list_for_owner(owner_id, owner_id)] == [url_id]


class TestListForOwner:
    def test_lists_own_urls(self, service):
        owner = UserFactory()
        ShortURLFactory(owner=owner, alias="one")
        ShortURLFactory(owner=owner, alias="two")
        ShortURLFactory(alias="someone-else")
        assert [u.alias for u in service.list_for_owner(owner.id, owner.id)] == ["one", "two"]

    def test_empty_list(self, service):
        user = UserFactory()
        assert service.list_for_owner(user.id, user.id) == []

    def test_other_users_list_is_forbidden(self, service):
        with pytest.raises(AuthorizationError):
            service.list_for_owner(UserFactory().id, UserFactory().id)
