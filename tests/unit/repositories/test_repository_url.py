"""Unit tests for :class:`URLRepository`."""

from __future__ import annotations

import pytest
from sqlalchemy import event

from makeshort.repositories.url import URLRepository
from makeshort.services._shared.errors import AliasAlreadyExistsError, NotFoundError
from tests.factories.url import ShortURLFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> URLRepository:
    return URLRepository(session=session)


@pytest.fixture()
def captured_sql(connection):
    """Collect data statements sent to the database while the test runs."""
    statements: list[str] = []

    def _capture(conn, cursor, statement, parameters, context, executemany):
        verb = statement.lstrip().split(None, 1)[0].lower()
        if verb in {"select", "insert", "update", "delete"}:
            statements.append(statement)

    event.listen(connection, "before_cursor_execute", _capture)
    try:
        yield statements
    finally:
        event.remove(connection, "before_cursor_execute", _capture)


class TestCreate:
    def test_persists_with_zero_redirects(self, repo, session):
        owner = UserFactory()
        url = repo.create(long_url="https://example.com/a", alias="abc123", owner_id=owner.id)
        assert url.id is not None
        assert url.redirect_count == 0
        assert repo.get_by_alias("abc123").long_url == "https://example.com/a"

    def test_duplicate_alias_raises_and_keeps_transaction_usable(self, repo, session):
        existing = ShortURLFactory(alias="dup")
        with pytest.raises(AliasAlreadyExistsError) as err:
            repo.create(long_url="https://other.io", alias="dup", owner_id=existing.user_id)
        assert err.value.alias == "dup"

        # Only the savepoint was rolled back
        again = repo.create(long_url="https://other.io", alias="fresh", owner_id=existing.user_id)
        assert again.id is not None
        assert len(repo.list_by_owner(existing.user_id)) == 2


class TestIncrementRedirectCounter:
    def test_adds_exactly_one(self, repo, session):
        url = ShortURLFactory(alias="count-me")
        repo.increment_redirect_counter("count-me")
        repo.increment_redirect_counter("count-me")
        session.refresh(url)
        assert url.redirect_count == 2

    def test_is_a_single_update_statement(self, repo, session, captured_sql):
        ShortURLFactory(alias="atomic")
        captured_sql.clear()

        repo.increment_redirect_counter("atomic")

        assert len(captured_sql) == 1
        sql = captured_sql[0].lower()
        assert sql.startswith("update urls")
        assert "redirect_count + " in sql

    def test_unknown_alias_raises(self, repo):
        with pytest.raises(NotFoundError):
            repo.increment_redirect_counter("nope")


class TestUpdate:
    def test_partial_update_changes_only_given_fields(self, repo, session):
        url = ShortURLFactory(alias="before", long_url="https://old.example")
        updated = repo.update(url.id, alias="after")
        assert updated.alias == "after"
        assert updated.long_url == "https://old.example"

        updated = repo.update(url.id, long_url="https://new.example")
        assert updated.alias == "after"
        assert updated.long_url == "https://new.example"

    def test_empty_values_are_ignored(self, repo, session):
        url = ShortURLFactory(alias="keep")
        assert repo.update(url.id, alias="", long_url=None).alias == "keep"

    def test_taken_alias_raises(self, repo, session):
        ShortURLFactory(alias="first")
        second = ShortURLFactory(alias="second")
        with pytest.raises(AliasAlreadyExistsError):
            repo.update(second.id, alias="first")
        session.expire_all()
        assert repo.get_by_id(second.id).alias == "second"

    def test_missing_id_raises(self, repo):
        with pytest.raises(NotFoundError):
            repo.update(999_999, alias="whatever")


class TestDeleteAndRead:
    def test_delete_by_id(self, repo, session):
        url = ShortURLFactory()
        url_id = url.id
        repo.delete_by_id(url_id)
        with pytest.raises(NotFoundError):
            repo.get_by_id(url_id)
        with pytest.raises(NotFoundError):
            repo.delete_by_id(url_id)

    def test_delete_by_alias(self, repo, session):
        ShortURLFactory(alias="gone")
        repo.delete_by_alias("gone")
        with pytest.raises(NotFoundError):
            repo.get_by_alias("gone")
        with pytest.raises(NotFoundError):
            repo.delete_by_alias("gone")

    def test_list_by_owner_only_returns_owned_rows(self, repo, session):
        owner = UserFactory()
        a = ShortURLFactory(owner=owner)
        b = ShortURLFactory(owner=owner)
        ShortURLFactory()

        listed = repo.list_by_owner(owner.id)
        assert [u.id for u in listed] == [a.id, b.id]

    def test_list_by_owner_empty(self, repo, session):
        assert repo.list_by_owner(UserFactory().id) == []
