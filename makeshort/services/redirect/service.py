# makeshort/services/redirect/service.py
from __future__ import annotations

import logging

from makeshort.repositories.url import URLRepository
from makeshort.services._shared.base import BaseService

log = logging.getLogger(__name__)


class RedirectService(BaseService):
    """Resolve public aliases and count each redirect exactly once."""

    def resolve(self, alias: str) -> str:
        """
        Return the target of ``alias`` and add one to its redirect counter.

        Lookup and increment share one transaction; the increment itself is a
        single atomic ``UPDATE`` so concurrent visits are never lost.

        :raises NotFoundError: If ``alias`` is unknown.
        """
        with self.rw_uow() as uow:
            repo: URLRepository = uow.urls
            target = repo.get_by_alias(alias).long_url
            repo.increment_redirect_counter(alias)

        log.debug("alias resolved", extra={"op": "redirect.resolve", "alias": alias})
        return target
