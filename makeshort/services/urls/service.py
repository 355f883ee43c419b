"""
URLService
==========

Owner-checked mutations and listings of short URLs:

- Shorten a URL with a caller-chosen or generated alias.
- Partially update or delete a URL (owner only).
- List a user's URLs (that user only).

Alias collisions surface as :class:`AliasAlreadyExistsError` (HTTP 409); the
service never retries with another candidate.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from makeshort.models.url import ALIAS_MAX_LENGTH
from makeshort.repositories.url import URLRepository
from makeshort.services._shared.base import BaseService
from makeshort.services._shared.errors import ValidationError
from makeshort.services.urls.alias import DEFAULT_ALIAS_LENGTH, generate_alias
from makeshort.services.urls.dto import URLCreateIn, URLOut, URLUpdateIn

log = logging.getLogger(__name__)

ALIAS_PATTERN = re.compile(rf"^[A-Za-z0-9_-]{{1,{ALIAS_MAX_LENGTH}}}$")
ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_long_url(value: str) -> str:
    """Return ``value`` stripped if it is an absolute http(s) URL.

    :raises ValidationError: Otherwise.
    """
    candidate = (value or "").strip()
    parts = urlsplit(candidate)
    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.netloc:
        raise ValidationError("URL must be an absolute http(s) URL")
    return candidate


def validate_alias(value: str) -> str:
    """:raises ValidationError: If ``value`` is not 1-32 chars of ``[A-Za-z0-9_-]``."""
    if not ALIAS_PATTERN.match(value):
        raise ValidationError(
            f"Alias must be 1-{ALIAS_MAX_LENGTH} characters of letters, digits, '_' or '-'"
        )
    return value


class URLService(BaseService):
    """
    Application service for the ``ShortURL`` aggregate.

    Every mutating call takes the acting user's id explicitly.
    """

    def __init__(self, *, alias_length: int = DEFAULT_ALIAS_LENGTH) -> None:
        self.alias_length = alias_length

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create(self, actor_id: int, dto: URLCreateIn) -> URLOut:
        """
        Shorten ``dto.long_url`` for ``actor_id``.

        :raises ValidationError: On a malformed URL or alias.
        :raises AliasAlreadyExistsError: If the alias is taken.
        """
        long_url = validate_long_url(dto.long_url)
        alias = validate_alias(dto.alias) if dto.alias else generate_alias(self.alias_length)

        with self.rw_uow() as uow:
            repo: URLRepository = uow.urls
            url = repo.create(long_url=long_url, alias=alias, owner_id=actor_id)
            out = URLOut.from_model(url)

        log.info(
            "short url created",
            extra={"op": "urls.create", "user_id": actor_id, "url_id": out.id, "alias": out.alias},
        )
        return out

    def update(self, actor_id: int, url_id: int, dto: URLUpdateIn) -> URLOut:
        """
        Change the target and/or alias of a URL owned by ``actor_id``.

        :raises NotFoundError: If the URL does not exist.
        :raises AuthorizationError: If ``actor_id`` is not the owner.
        :raises AliasAlreadyExistsError: If the new alias is taken.
        """
        long_url = validate_long_url(dto.long_url) if dto.long_url else None
        alias = validate_alias(dto.alias) if dto.alias else None

        with self.rw_uow() as uow:
            repo: URLRepository = uow.urls
            url = repo.get_by_id(url_id)
            self.ensure_owner(actor_id, url.user_id, msg="You can only modify your own URLs.")
            url = repo.update(url_id, alias=alias, long_url=long_url)
            repo.flush()
            out = URLOut.from_model(url)

        log.info("short url updated", extra={"op": "urls.update", "user_id": actor_id, "url_id": url_id})
        return out

    def delete(self, actor_id: int, url_id: int) -> None:
        """
        Delete a URL owned by ``actor_id``.

        :raises NotFoundError: If the URL does not exist.
        :raises AuthorizationError: If ``actor_id`` is not the owner.
        """
        with self.rw_uow() as uow:
            repo: URLRepository = uow.urls
            url = repo.get_by_id(url_id)
            self.ensure_owner(actor_id, url.user_id, msg="You can only delete your own URLs.")
            repo.delete_by_id(url_id)

        log.info("short url deleted", extra={"op": "urls.delete", "user_id": actor_id, "url_id": url_id})

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_for_owner(self, actor_id: int, owner_id: int) -> list[URLOut]:
        """
        List every URL of ``owner_id``; callers may only list their own.

        :returns: Possibly empty list ordered by creation.
        :raises AuthorizationError: If ``actor_id != owner_id``.
        """
        self.ensure_owner(actor_id, owner_id, msg="You can only list your own URLs.")
        with self.ro_uow() as uow:
            repo: URLRepository = uow.urls
            return [URLOut.from_model(url) for url in repo.list_by_owner(owner_id)]
