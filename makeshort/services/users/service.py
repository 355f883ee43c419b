"""
UserService
===========

Read and delete user accounts. Deleting an account removes the user's short
URLs (ORM cascade plus ``ON DELETE CASCADE``) and closes every refresh
session the user still holds.
"""

from __future__ import annotations

import logging

from makeshort.repositories.user import UserRepository
from makeshort.services._shared.base import BaseService
from makeshort.services._shared.errors import NotFoundError
from makeshort.services._shared.ports import SessionStore
from makeshort.services.users.dto import UserPublicOut

log = logging.getLogger(__name__)


class UserService(BaseService):
    """Application service for the ``User`` aggregate outside authentication."""

    def __init__(self, *, session_store: SessionStore) -> None:
        self.sessions = session_store

    def get_user(self, user_id: int) -> UserPublicOut:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut(id=user.id, email=user.email, username=user.username)

    def delete_user(self, actor_id: int, user_id: int) -> None:
        """
        Delete the account ``user_id``; only its owner may do so.

        :raises AuthorizationError: If ``actor_id != user_id``.
        :raises NotFoundError: If the user does not exist.
        """
        self.ensure_owner(actor_id, user_id, msg="You can only delete your own account.")
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            repo.delete(user)

        closed = self.sessions.close_all_for_user(user_id)
        log.info(
            "user deleted",
            extra={"op": "users.delete", "user_id": user_id},
        )
        log.debug("closed %d refresh sessions", closed, extra={"op": "users.delete", "user_id": user_id})
