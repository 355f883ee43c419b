"""Shared API helpers for authentication, cookies and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from makeshort.core.errors import Unauthorized
from makeshort.core.extensions import get_hasher, get_session_store, get_token_manager
from makeshort.services.auth.dto import ClientInfo
from makeshort.services.auth.service import AuthService
from makeshort.services.redirect.service import RedirectService
from makeshort.services.urls.service import URLService
from makeshort.services.users.service import UserService

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "


# ------------------------------ Services ------------------------------------


def auth_service() -> AuthService:
    return AuthService(
        token_manager=get_token_manager(),
        session_store=get_session_store(),
        hasher=get_hasher(),
    )


def url_service() -> URLService:
    return URLService(alias_length=int(current_app.config.get("ALIAS_LENGTH", 6)))


def redirect_service() -> RedirectService:
    return RedirectService()


def user_service() -> UserService:
    return UserService(session_store=get_session_store())


# ------------------------------ Auth ----------------------------------------


def bearer_token() -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, if any."""

    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):].strip() or None


def require_auth(func: F) -> F:
    """Verify the access token and pass the caller's id as ``actor_id``.

    Verification is stateless: signature, algorithm, type and expiry only.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        raw = bearer_token()
        if raw is None:
            raise Unauthorized("Missing bearer token")
        claims = get_token_manager().parse_access(raw)
        return func(*args, actor_id=claims.user_id, **kwargs)

    return wrapper  # type: ignore[return-value]


def client_info() -> ClientInfo:
    """Collect the client address and user agent recorded on sessions."""

    agent = request.headers.get("User-Agent")
    return ClientInfo(ip=request.remote_addr, user_agent=agent[:255] if agent else None)


# ------------------------------ Cookies -------------------------------------


def refresh_cookie() -> str | None:
    """Return the refresh token cookie value, if present."""

    return request.cookies.get(current_app.config["REFRESH_COOKIE_NAME"]) or None


def set_refresh_cookie(response: Response, token: str) -> Response:
    """Attach the refresh token as an HttpOnly cookie living as long as the session."""

    cfg = current_app.config
    response.set_cookie(
        cfg["REFRESH_COOKIE_NAME"],
        token,
        max_age=int(cfg["REFRESH_TOKEN_TTL"].total_seconds()),
        path=cfg["REFRESH_COOKIE_PATH"],
        domain=cfg.get("REFRESH_COOKIE_DOMAIN"),
        secure=bool(cfg.get("REFRESH_COOKIE_SECURE")),
        httponly=True,
        samesite=cfg.get("REFRESH_COOKIE_SAMESITE", "Lax"),
    )
    return response


def clear_refresh_cookie(response: Response) -> Response:
    cfg = current_app.config
    response.delete_cookie(
        cfg["REFRESH_COOKIE_NAME"],
        path=cfg["REFRESH_COOKIE_PATH"],
        domain=cfg.get("REFRESH_COOKIE_DOMAIN"),
        secure=bool(cfg.get("REFRESH_COOKIE_SECURE")),
        httponly=True,
        samesite=cfg.get("REFRESH_COOKIE_SAMESITE", "Lax"),
    )
    return response


# ------------------------------ Responses -----------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
