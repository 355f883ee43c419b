"""Refresh session rows for the SQL session store."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from makeshort.models.refresh_session import RefreshSession
from makeshort.repositories.base import BaseRepository
from makeshort.services._shared.errors import SessionAlreadyExistsError


class RefreshSessionRepository(BaseRepository[RefreshSession]):
    """Persistence-only access to ``refresh_sessions``; expiry policy is the store's."""

    model = RefreshSession

    def create(
        self,
        *,
        refresh_token: str,
        user_id: int,
        ip: str | None,
        user_agent: str | None,
        created_at: datetime,
        expires_at: datetime,
    ) -> RefreshSession:
        """:raises SessionAlreadyExistsError: On ``uq_refresh_sessions_refresh_token``."""
        row = RefreshSession(
            refresh_token=refresh_token,
            user_id=user_id,
            ip=ip,
            user_agent=user_agent,
            created_at=created_at,
            expires_at=expires_at,
        )
        try:
            with self.session.begin_nested():
                self.session.add(row)
        except IntegrityError as exc:
            raise SessionAlreadyExistsError() from exc
        return row

    def get_by_token(self, refresh_token: str) -> RefreshSession | None:
        stmt = select(RefreshSession).where(RefreshSession.refresh_token == refresh_token)
        return cast(RefreshSession | None, self.session.execute(stmt).scalars().first())

    def delete_live(self, refresh_token: str, *, now: datetime) -> int:
        """Delete the row only if it has not expired; returns rows deleted."""
        stmt = delete(RefreshSession).where(
            RefreshSession.refresh_token == refresh_token,
            RefreshSession.expires_at > now,
        )
        return self.session.execute(stmt.execution_options(synchronize_session=False)).rowcount

    def delete_by_token(self, refresh_token: str) -> int:
        stmt = delete(RefreshSession).where(RefreshSession.refresh_token == refresh_token)
        return self.session.execute(stmt.execution_options(synchronize_session=False)).rowcount

    def delete_for_user(self, user_id: int) -> int:
        stmt = delete(RefreshSession).where(RefreshSession.user_id == user_id)
        return self.session.execute(stmt.execution_options(synchronize_session=False)).rowcount
