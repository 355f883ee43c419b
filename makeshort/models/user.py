"""User account model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from makeshort.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .refresh_session import RefreshSession
    from .url import ShortURL


def normalize_email(value: str) -> str:
    """Trim and lowercase an email address."""
    return value.strip().lower()


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity that owns short URLs and refresh sessions.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    username : str
        Public handle. Unique.
    password_hash : str
        Salted digest produced by the configured hasher.
    urls : list[ShortURL]
        Owned short links; deleted together with the user.
    sessions : list[RefreshSession]
        Live refresh sessions; deleted together with the user.
    """

    __tablename__ = "users"
    __repr_fields__ = ("username",)

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    urls: Mapped[list[ShortURL]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    sessions: Mapped[list[RefreshSession]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check the email.

        :raises ValueError: If email is missing or obviously malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = normalize_email(value)
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim the username.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()
