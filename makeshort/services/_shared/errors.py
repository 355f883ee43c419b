"""
Domain-level exceptions used within the service layer.

These exceptions are framework-agnostic: repositories, stores and services
raise them, and ``makeshort/core/errors.py`` turns them into RFC 7807
responses via :meth:`BaseService.translate_exceptions`.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite only reports the columns
    (``UNIQUE constraint failed: urls.alias``), so the column suffix of the
    ``uq_<table>_<column>`` name is matched as a fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table_and_column = name[3:]
        for table in ("refresh_sessions", "users", "urls"):
            prefix = f"{table}_"
            if table_and_column.startswith(prefix):
                column = table_and_column[len(prefix):]
                return f"{table}.{column}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, stores or services.
    """


class ValidationError(ServiceError):
    """Raised when input (URL, alias, email) is malformed."""


class AuthenticationError(ServiceError):
    """Raised when credentials or tokens are missing, invalid or expired."""


class AuthorizationError(ServiceError):
    """Raised when an authenticated actor may not touch a resource."""


class InternalError(ServiceError):
    """Raised when a backing store fails in a way callers cannot fix."""


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "ShortURL").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True, eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AliasAlreadyExistsError(ConflictError):
    """Alias uniqueness violated on create or update."""

    def __init__(self, alias: str) -> None:
        super().__init__(entity="ShortURL", detail=f"alias '{alias}' is already taken")
        self.alias = alias


class UserAlreadyExistsError(ConflictError):
    """Email or username already registered."""

    def __init__(self, field: str) -> None:
        super().__init__(entity="User", detail=f"{field} already registered")
        self.field = field


class SessionAlreadyExistsError(ConflictError):
    """A live session already uses this refresh token."""

    def __init__(self) -> None:
        super().__init__(entity="RefreshSession", detail="refresh token already in use")


class SessionNotFoundError(NotFoundError):
    """No live session for the given refresh token (absent, closed or expired)."""

    def __init__(self) -> None:
        # Token value is a secret; never echo it back
        super().__init__(entity="RefreshSession", key="<redacted>")


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidTokenError(AuthenticationError):
    def __init__(self, reason: str = "Invalid access token") -> None:
        super().__init__(reason)


class InvalidRefreshTokenError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired refresh token")
