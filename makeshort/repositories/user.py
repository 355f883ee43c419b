"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from makeshort.models.user import User, normalize_email
from makeshort.repositories.base import BaseRepository
from makeshort.services._shared.errors import UserAlreadyExistsError, violates


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens or sessions; only DB-level user management.
    """

    model = User

    def create(self, *, email: str, username: str, password_hash: str) -> User:
        """Insert a user, relying on the unique constraints for duplicates.

        :raises UserAlreadyExistsError: When ``uq_users_email`` or
            ``uq_users_username`` is violated. The savepoint is rolled back so
            the surrounding transaction stays usable.
        """
        user = User(email=email, username=username, password_hash=password_hash)
        try:
            with self.session.begin_nested():
                self.session.add(user)
        except IntegrityError as exc:
            field = "username" if violates(exc, "uq_users_username") else "email"
            raise UserAlreadyExistsError(field) from exc
        return user

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_credentials(self, email: str, password_hash: str) -> User | None:
        """Fetch the user matching both ``email`` and the stored hash.

        :returns: User instance or ``None`` when either part does not match.
        """
        stmt = select(User).where(
            User.email == normalize_email(email),
            User.password_hash == password_hash,
        )
        return cast(User | None, self.session.execute(stmt).scalars().first())
