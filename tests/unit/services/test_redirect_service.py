# tests/unit/services/test_redirect_service.py
from __future__ import annotations

import pytest

from makeshort.services._shared.errors import NotFoundError
from makeshort.services.redirect.service import RedirectService
from tests.factories.url import ShortURLFactory


def test_resolve_returns_target_and_counts(session):
    url = ShortURLFactory(alias="go", long_url="https://target.example/page")
    service = RedirectService()

    assert service.resolve("go") == "https://target.example/page"
    assert service.resolve("go") == "https://target.example/page"

    session.refresh(url)
    assert url.redirect_count == 2


def test_unknown_alias_is_not_found():
    with pytest.raises(NotFoundError):
        RedirectService().resolve("missing")


def test_aliases_are_case_sensitive(session):
    ShortURLFactory(alias="CaseY")
    with pytest.raises(NotFoundError):
        RedirectService().resolve("casey")
