# makeshort/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for registration.

    :param email: Login email (normalized by the service).
    :type email: str
    :param username: Public handle.
    :type username: str
    :param password: Raw password, hashed before storage.
    :type password: str
    """

    email: str
    username: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class ClientInfo:
    """
    Client context recorded on a refresh session.

    :param ip: Remote address after proxy rewriting.
    :type ip: str | None
    :param user_agent: ``User-Agent`` header.
    :type user_agent: str | None
    """

    ip: str | None = None
    user_agent: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public-safe user projection."""

    id: int
    email: str
    username: str


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Signed access JWT.
    :type access_token: str
    :param refresh_token: Opaque refresh token, also set as an HttpOnly cookie.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str
