# makeshort/services/urls/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from makeshort.models.url import ShortURL


@dataclass(frozen=True, slots=True)
class URLCreateIn:
    """
    Input DTO for shortening a URL.

    :param long_url: Absolute ``http``/``https`` target.
    :type long_url: str
    :param alias: Optional caller-chosen alias; generated when ``None``.
    :type alias: str | None
    """

    long_url: str
    alias: str | None = None


@dataclass(frozen=True, slots=True)
class URLUpdateIn:
    """
    Input DTO for a partial update; ``None`` or empty fields are left as-is.
    """

    long_url: str | None = None
    alias: str | None = None


@dataclass(frozen=True, slots=True)
class URLOut:
    """Short URL projection returned by the service."""

    id: int
    owner_id: int
    long_url: str
    alias: str
    redirect_count: int
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, url: ShortURL) -> URLOut:
        return cls(
            id=url.id,
            owner_id=url.user_id,
            long_url=url.long_url,
            alias=url.alias,
            redirect_count=url.redirect_count or 0,
            created_at=url.created_at,
            updated_at=url.updated_at,
        )
