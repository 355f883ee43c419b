"""Server-side refresh session rows (used by the ``database`` backend)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from makeshort.core.extensions import db

from .base import PKMixin, ReprMixin

if TYPE_CHECKING:
    from .user import User


class RefreshSession(PKMixin, ReprMixin, db.Model):
    """
    Binding of one opaque refresh token to a user until ``expires_at``.

    Rows are deleted on logout and on rotation; expired rows that were not
    yet purged are treated as absent by readers.
    """

    __tablename__ = "refresh_sessions"
    __repr_fields__ = ("user_id", "expires_at")

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    refresh_token: Mapped[str] = mapped_column(String(64), nullable=False)
    ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[User] = relationship(back_populates="sessions")

    __table_args__ = (
        UniqueConstraint("refresh_token", name="uq_refresh_sessions_refresh_token"),
        Index("ix_refresh_sessions_user_id", "user_id"),
    )
