"""Short URL model: alias to target mapping with a redirect counter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from makeshort.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User

ALIAS_MAX_LENGTH = 32


class ShortURL(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A short link owned by a user.

    Fields
    ------
    user_id : int
        Owner. Cascades on user deletion.
    long_url : str
        Absolute target URL.
    alias : str
        Globally unique token used in ``GET /<alias>``. Uniqueness is enforced
        by ``uq_urls_alias`` only; callers never pre-check.
    redirect_count : int
        Monotonic counter incremented by a single ``UPDATE`` per redirect.
    """

    __tablename__ = "urls"
    __repr_fields__ = ("alias",)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    long_url: Mapped[str] = mapped_column(Text, nullable=False)
    alias: Mapped[str] = mapped_column(String(ALIAS_MAX_LENGTH), nullable=False)
    redirect_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    owner: Mapped[User] = relationship(back_populates="urls")

    __table_args__ = (
        UniqueConstraint("alias", name="uq_urls_alias"),
        CheckConstraint("redirect_count >= 0", name="redirect_count_non_negative"),
        Index("ix_urls_user_id", "user_id"),
    )
