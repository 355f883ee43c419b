"""Unit of Work contract shared by the read-write and read-only variants."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from makeshort.repositories import RefreshSessionRepository, URLRepository, UserRepository


class UnitOfWork(ABC):
    """
    Transactional boundary of one service call.

    Every repository exposed here shares the same session, so a block such
    as "look up the alias, then bump its counter" either lands as a whole or
    not at all.

    :ivar users: Accounts.
    :ivar urls: Short URL directory.
    :ivar refresh_sessions: Refresh session rows (``database`` backend only).
    """

    users: UserRepository
    urls: URLRepository
    refresh_sessions: RefreshSessionRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        """Commit when the block completed, roll back when it raised."""

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
