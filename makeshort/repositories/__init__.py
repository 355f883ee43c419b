"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from makeshort.repositories.base import BaseRepository, parse_sort_tokens
from makeshort.repositories.refresh_session import RefreshSessionRepository
from makeshort.repositories.url import URLRepository
from makeshort.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "parse_sort_tokens",
    "RefreshSessionRepository",
    "URLRepository",
    "UserRepository",
]
