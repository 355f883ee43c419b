from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol

from makeshort.services._shared.errors import SessionAlreadyExistsError, SessionNotFoundError


@dataclass(frozen=True)
class RefreshSession:
    """
    Read-model for a server-side refresh session.

    :ivar refresh_token: Opaque token value (secret; never log it).
    :ivar user_id: Owner user id.
    :ivar ip: Client address seen at creation.
    :ivar user_agent: Client ``User-Agent`` seen at creation.
    :ivar created_at: Creation instant (UTC).
    :ivar expires_at: Absolute expiration (UTC).
    """

    refresh_token: str
    user_id: int
    ip: str | None
    user_agent: str | None
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(UTC))


class SessionStore(Protocol):
    """
    Stateful store binding refresh tokens to users until expiry.

    Lifecycle of a token: ``absent -> active -> consumed -> absent``. A closed
    token can never become active again; rotation is close-then-create.
    """

    ttl: timedelta

    def create(
        self,
        *,
        refresh_token: str,
        user_id: int,
        ip: str | None = None,
        user_agent: str | None = None,
    ) -> RefreshSession:
        """
        Persist a new session expiring ``ttl`` from now.

        :raises SessionAlreadyExistsError: If the token already has a live session.
        """

    def get(self, refresh_token: str) -> RefreshSession:
        """
        Fetch a live session.

        :raises SessionNotFoundError: If absent, closed or expired.
        """

    def close(self, refresh_token: str) -> None:
        """
        Delete a session. A second close of the same token fails.

        :raises SessionNotFoundError: If absent, already closed or expired.
        """

    def close_all_for_user(self, user_id: int) -> int:
        """
        Delete every session of ``user_id``.

        :returns: Number of sessions removed.
        """


class InMemorySessionStore(SessionStore):
    """
    Process-local session store for development and tests.

    .. note::
       A lock makes check-and-set atomic within one process only.
    """

    def __init__(self, *, ttl: timedelta = timedelta(hours=48)) -> None:
        self.ttl = ttl
        self._by_token: dict[str, RefreshSession] = {}
        self._lock = threading.Lock()

    def _live(self, refresh_token: str, now: datetime) -> RefreshSession | None:
        session = self._by_token.get(refresh_token)
        if session is None:
            return None
        if session.is_expired(now):
            del self._by_token[refresh_token]
            return None
        return session

    def create(
        self,
        *,
        refresh_token: str,
        user_id: int,
        ip: str | None = None,
        user_agent: str | None = None,
    ) -> RefreshSession:
        now = datetime.now(UTC)
        with self._lock:
            if self._live(refresh_token, now) is not None:
                raise SessionAlreadyExistsError()
            session = RefreshSession(
                refresh_token=refresh_token,
                user_id=user_id,
                ip=ip,
                user_agent=user_agent,
                created_at=now,
                expires_at=now + self.ttl,
            )
            self._by_token[refresh_token] = session
            return session

    def get(self, refresh_token: str) -> RefreshSession:
        with self._lock:
            session = self._live(refresh_token, datetime.now(UTC))
        if session is None:
            raise SessionNotFoundError()
        return session

    def close(self, refresh_token: str) -> None:
        with self._lock:
            if self._live(refresh_token, datetime.now(UTC)) is None:
                raise SessionNotFoundError()
            del self._by_token[refresh_token]

    def close_all_for_user(self, user_id: int) -> int:
        with self._lock:
            tokens = [t for t, s in self._by_token.items() if s.user_id == user_id]
            for token in tokens:
                del self._by_token[token]
            return len(tokens)

    def expire_now(self, refresh_token: str) -> None:
        """Force a session past its expiry (test helper)."""
        with self._lock:
            session = self._by_token[refresh_token]
            self._by_token[refresh_token] = replace(
                session, expires_at=datetime.now(UTC) - timedelta(seconds=1)
            )
