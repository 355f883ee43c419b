from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from makeshort.models.base import as_utc
from makeshort.services._shared.errors import SessionNotFoundError
from makeshort.services._shared.ports import RefreshSession, SessionStore
from makeshort.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


@dataclass(slots=True)
class SQLSessionStore(SessionStore):
    """
    Relational refresh session store on the ``refresh_sessions`` table.

    The database has no TTL eviction, so every read compares ``expires_at``
    with the current time and treats stale rows as absent. ``close`` is a
    single conditional ``DELETE``; its rowcount decides success.

    Each call runs in its own unit of work and commits independently.
    """

    ttl: timedelta = field(default=timedelta(hours=48))

    def create(
        self,
        *,
        refresh_token: str,
        user_id: int,
        ip: str | None = None,
        user_agent: str | None = None,
    ) -> RefreshSession:
        now = datetime.now(UTC)
        with SQLAlchemyUnitOfWork() as uow:
            # A stale row for the same token would block the unique constraint
            stale = uow.refresh_sessions.get_by_token(refresh_token)
            if stale is not None and as_utc(stale.expires_at) <= now:
                uow.refresh_sessions.delete_by_token(refresh_token)
            uow.refresh_sessions.create(
                refresh_token=refresh_token,
                user_id=user_id,
                ip=ip,
                user_agent=user_agent,
                created_at=now,
                expires_at=now + self.ttl,
            )
        return RefreshSession(
            refresh_token=refresh_token,
            user_id=user_id,
            ip=ip,
            user_agent=user_agent,
            created_at=now,
            expires_at=now + self.ttl,
        )

    def get(self, refresh_token: str) -> RefreshSession:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.refresh_sessions.get_by_token(refresh_token)
            if row is None:
                raise SessionNotFoundError()
            session = RefreshSession(
                refresh_token=row.refresh_token,
                user_id=row.user_id,
                ip=row.ip,
                user_agent=row.user_agent,
                created_at=as_utc(row.created_at),
                expires_at=as_utc(row.expires_at),
            )
        if session.is_expired():
            raise SessionNotFoundError()
        return session

    def close(self, refresh_token: str) -> None:
        now = datetime.now(UTC)
        with SQLAlchemyUnitOfWork() as uow:
            deleted = uow.refresh_sessions.delete_live(refresh_token, now=now)
            if not deleted:
                # Purge an expired leftover, then report it as absent
                uow.refresh_sessions.delete_by_token(refresh_token)
        if not deleted:
            raise SessionNotFoundError()

    def close_all_for_user(self, user_id: int) -> int:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.refresh_sessions.delete_for_user(user_id)
