# comments in English; reST docstrings
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from makeshort.services._shared.errors import (
    InternalError,
    SessionAlreadyExistsError,
    SessionNotFoundError,
)
from makeshort.services._shared.ports import RefreshSession, SessionStore

log = logging.getLogger(__name__)


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed refresh session store.

    Layout
    ------
    ``rs:{token}``
        JSON document ``{user_id, ip, user_agent, created_at, expires_at}``
        written with ``SET NX EX ttl`` so Redis evicts it at expiry.
    ``rs:u:{user_id}``
        Set of the user's tokens, used by :meth:`close_all_for_user`.

    :param r: A Redis client (already connected).
    :param ttl: Session lifetime.
    """

    r: redis.Redis
    ttl: timedelta = field(default=timedelta(hours=48))

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str) -> str:
        return f"rs:{token}"

    @staticmethod
    def _ku(user_id: int) -> str:
        return f"rs:u:{user_id}"

    @staticmethod
    def _decode(token: str, raw: bytes | str) -> RefreshSession:
        data = json.loads(raw.decode() if isinstance(raw, bytes) else raw)
        return RefreshSession(
            refresh_token=token,
            user_id=int(data["user_id"]),
            ip=data.get("ip"),
            user_agent=data.get("user_agent"),
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )

    # -------------------- API ------------------------

    def create(
        self,
        *,
        refresh_token: str,
        user_id: int,
        ip: str | None = None,
        user_agent: str | None = None,
    ) -> RefreshSession:
        now = datetime.now(UTC)
        session = RefreshSession(
            refresh_token=refresh_token,
            user_id=user_id,
            ip=ip,
            user_agent=user_agent,
            created_at=now,
            expires_at=now + self.ttl,
        )
        doc = json.dumps(
            {
                "user_id": user_id,
                "ip": ip,
                "user_agent": user_agent,
                "created_at": session.created_at.isoformat(),
                "expires_at": session.expires_at.isoformat(),
            }
        )
        ttl_seconds = max(1, int(self.ttl.total_seconds()))
        key = self._k(refresh_token)
        try:
            created = self.r.set(key, doc, nx=True, ex=ttl_seconds)
        except RedisError as exc:
            raise InternalError("session store unavailable") from exc
        if not created:
            raise SessionAlreadyExistsError()
        try:
            pipe = self.r.pipeline(transaction=True)
            pipe.sadd(self._ku(user_id), refresh_token)
            pipe.expire(self._ku(user_id), ttl_seconds)
            pipe.execute()
        except RedisError as exc:
            # The caller is told creation failed, so the key must not stay live
            self._discard(key)
            raise InternalError("session store unavailable") from exc
        return session

    def _discard(self, key: str) -> None:
        try:
            self.r.delete(key)
        except RedisError:
            log.warning("could not roll back session key after a failed create", exc_info=True)

    def get(self, refresh_token: str) -> RefreshSession:
        try:
            raw = self.r.get(self._k(refresh_token))
        except RedisError as exc:
            raise InternalError("session store unavailable") from exc
        if raw is None:
            raise SessionNotFoundError()
        session = self._decode(refresh_token, raw)
        if session.is_expired():
            raise SessionNotFoundError()
        return session

    def close(self, refresh_token: str) -> None:
        """
        Delete the session. ``DEL`` decides atomically which of two racing
        closes wins; the loser gets :class:`SessionNotFoundError`.
        """
        key = self._k(refresh_token)
        try:
            raw = self.r.get(key)
            if raw is None or not self.r.delete(key):
                raise SessionNotFoundError()
            session = self._decode(refresh_token, raw)
            self.r.srem(self._ku(session.user_id), refresh_token)
        except RedisError as exc:
            raise InternalError("session store unavailable") from exc
        if session.is_expired():
            raise SessionNotFoundError()

    def close_all_for_user(self, user_id: int) -> int:
        try:
            members = self.r.smembers(self._ku(user_id))
            tokens = [m.decode() if isinstance(m, bytes) else m for m in members]
            pipe = self.r.pipeline(transaction=True)
            for token in tokens:
                pipe.delete(self._k(token))
            pipe.delete(self._ku(user_id))
            results = pipe.execute()
        except RedisError as exc:
            raise InternalError("session store unavailable") from exc
        return sum(int(n) for n in results[: len(tokens)])
