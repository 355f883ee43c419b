from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, InvalidAlgorithmError, PyJWTError

from makeshort.services._shared.errors import InvalidTokenError
from makeshort.services._shared.ports import TokenClaims, TokenManager, TokenPair


@dataclass(slots=True)
class JWTTokenManager(TokenManager):
    """
    Adapter for Flask-JWT-Extended.

    Access tokens are HS256 JWTs carrying ``sub`` (user id as a string),
    ``iat``, ``exp`` and ``type="access"``. Refresh tokens are opaque random
    strings whose lifetime is tracked by the session store.

    .. note::
       Requires an active Flask app context; the signing secret and accepted
       algorithm come from ``JWT_SECRET_KEY`` / ``JWT_ALGORITHM``.
    """

    access_ttl: timedelta

    def issue_pair(self, user_id: int) -> TokenPair:
        access = cast(str, create_access_token(identity=str(user_id), expires_delta=self.access_ttl))
        return TokenPair(access_token=access, refresh_token=self.new_refresh_token())

    def parse_access(self, raw_token: str) -> TokenClaims:
        if not raw_token:
            raise InvalidTokenError("Missing access token")
        try:
            payload = cast(dict[str, Any], decode_token(raw_token))
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError(_reason(exc)) from exc

        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        try:
            user_id = int(payload["sub"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed access token") from exc
        return TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)


def _reason(exc: Exception) -> str:
    if isinstance(exc, ExpiredSignatureError):
        return "Access token expired"
    if isinstance(exc, InvalidAlgorithmError):
        return "Unexpected signing method"
    return "Invalid access token"
