# makeshort/services/_shared/base.py
from __future__ import annotations

import logging

from makeshort.core import errors as api_errors
from makeshort.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from makeshort.services._shared.policies.common import is_owner
from makeshort.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)

# Checked in order; first match wins
_HTTP_ERRORS: tuple[tuple[type[ServiceError], type[api_errors.APIError]], ...] = (
    (ValidationError, api_errors.BadRequest),
    (NotFoundError, api_errors.NotFound),
    (ConflictError, api_errors.Conflict),
    (AuthenticationError, api_errors.Unauthorized),
    (AuthorizationError, api_errors.Forbidden),
)


class BaseService:
    """
    Base class for application services.

    Services open a unit of work per use case, never touch ``db.session``
    directly, and receive the acting user's id as an explicit argument.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Read-write unit of work: commits on success, rolls back on error."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Read-only unit of work.

        :param enforce_db_readonly: Also issue ``SET TRANSACTION READ ONLY``
            on backends that support it.
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map a service error to the :class:`~makeshort.core.errors.APIError` the
        HTTP layer renders.

        ``InternalError`` becomes an opaque 500 (its text is logged, never
        returned). Non-service exceptions are returned unchanged.

        :param exc: Exception raised by a service, repository or store.
        :returns: The exception to re-raise or render.
        """
        if not isinstance(exc, ServiceError):
            return exc
        if isinstance(exc, InternalError):
            log.error("Internal service error: %s", exc, exc_info=exc)
            return api_errors.APIError("Internal error", status_code=500)
        for service_type, http_type in _HTTP_ERRORS:
            if isinstance(exc, service_type):
                return http_type(str(exc))
        return api_errors.BadRequest(str(exc))

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        :raises AuthorizationError: If ``actor_id`` does not own the resource.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You can only access your own resources.")
