"""Assertion helper utilities for tests."""

from __future__ import annotations

from contextlib import contextmanager


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Raises
    ------
    AssertionError
        If any required key is missing.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_problem(resp, status: int, code: str | None = None) -> dict:
    """Check an RFC 7807 error response and return its body."""

    assert resp.status_code == status, resp.get_data(as_text=True)
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert_json_keys(body, {"type", "title", "status", "detail", "message", "code", "request_id"})
    assert body["status"] == status
    if code is not None:
        assert body["code"] == code
    return body


@contextmanager
def not_raises(exception: type[BaseException]):
    """Fail the test if ``exception`` escapes the managed block."""

    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc
