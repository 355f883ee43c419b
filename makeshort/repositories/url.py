"""Short URL directory: alias uniqueness and atomic redirect counting."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from makeshort.models.url import ShortURL
from makeshort.repositories.base import BaseRepository
from makeshort.services._shared.errors import AliasAlreadyExistsError, NotFoundError


class URLRepository(BaseRepository[ShortURL]):
    """Persistence-only directory of :class:`ShortURL` rows.

    Two guarantees live here and nowhere else:

    * ``alias`` uniqueness is enforced by the ``uq_urls_alias`` constraint.
      There is no existence pre-check; the constraint violation is the
      signal, caught inside a SAVEPOINT so no partial row survives.
    * ``redirect_count`` only ever moves through a single
      ``UPDATE ... SET redirect_count = redirect_count + 1``, so concurrent
      redirects are all counted.

    Ownership checks belong to the caller.
    """

    model = ShortURL

    def _sortable_fields(self):
        return {
            "created_at": ShortURL.created_at,
        }

    def _updatable_fields(self) -> set[str]:
        return {"alias", "long_url"}

    # ------------------------------- Writes ----------------------------------

    def create(self, *, long_url: str, alias: str, owner_id: int) -> ShortURL:
        """Atomically insert a new short URL.

        :raises AliasAlreadyExistsError: If ``alias`` is taken.
        """
        url = ShortURL(long_url=long_url, alias=alias, user_id=owner_id, redirect_count=0)
        try:
            with self.session.begin_nested():
                self.session.add(url)
        except IntegrityError as exc:
            raise AliasAlreadyExistsError(alias) from exc
        return url

    def increment_redirect_counter(self, alias: str) -> None:
        """Add exactly one redirect to ``alias`` and refresh ``updated_at``.

        :raises NotFoundError: If no row has this alias.
        """
        stmt = (
            update(ShortURL)
            .where(ShortURL.alias == alias)
            .values(redirect_count=ShortURL.redirect_count + 1, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("ShortURL", alias)

    def update(
        self,
        url_id: int,
        *,
        alias: str | None = None,
        long_url: str | None = None,
    ) -> ShortURL:
        """Partially update a short URL; empty or ``None`` fields are ignored.

        :raises NotFoundError: If ``url_id`` does not exist.
        :raises AliasAlreadyExistsError: If the new alias is taken.
        """
        url = self.get_by_id(url_id)
        changes = {k: v for k, v in {"alias": alias, "long_url": long_url}.items() if v}
        if not changes:
            return url
        try:
            with self.session.begin_nested():
                self.assign_updates(url, changes, flush=False)
        except IntegrityError as exc:
            raise AliasAlreadyExistsError(changes.get("alias", url.alias)) from exc
        return url

    def delete_by_id(self, url_id: int) -> None:
        """:raises NotFoundError: If ``url_id`` does not exist."""
        result = self.session.execute(
            delete(ShortURL).where(ShortURL.id == url_id).execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            raise NotFoundError("ShortURL", url_id)

    def delete_by_alias(self, alias: str) -> None:
        """:raises NotFoundError: If no row has this alias."""
        result = self.session.execute(
            delete(ShortURL).where(ShortURL.alias == alias).execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            raise NotFoundError("ShortURL", alias)

    # ------------------------------- Reads -----------------------------------

    def get_by_id(self, url_id: int) -> ShortURL:
        """:raises NotFoundError: If ``url_id`` does not exist."""
        url = self.get(url_id)
        if url is None:
            raise NotFoundError("ShortURL", url_id)
        return url

    def get_by_alias(self, alias: str) -> ShortURL:
        """:raises NotFoundError: If no row has this alias."""
        url = self.session.execute(select(ShortURL).where(ShortURL.alias == alias)).scalars().first()
        if url is None:
            raise NotFoundError("ShortURL", alias)
        return cast(ShortURL, url)

    def list_by_owner(self, owner_id: int) -> list[ShortURL]:
        """Return every URL owned by ``owner_id``, oldest first (possibly empty)."""
        return self.list(filters={"user_id": owner_id}, sort=["created_at"])
