"""RFC 7807 ``application/problem+json`` errors for every failure path.

Body fields: ``type``, ``title``, ``status``, ``detail``, ``message`` (same
text as ``detail``), ``instance``, ``code`` (stable snake_case identifier),
``request_id`` and, for validation failures, ``details``. Internal error
text never reaches clients.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from makeshort.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"


def status_code_name(status: int) -> str:
    """Return the snake_case name of ``status`` (``404`` -> ``"not_found"``)."""
    try:
        return HTTPStatus(status).name.lower()
    except ValueError:
        return "error"


def problem(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a Problem Details body for the current request.

    :param status: HTTP status code.
    :param message: Client-safe summary.
    :param code: Stable error code; defaults to the status name.
    :param details: Optional structured, client-safe payload.
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "message": message,
        "instance": request.path,
        "code": code or status_code_name(status),
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def problem_response(body: dict[str, Any]) -> tuple[Response, int]:
    resp = jsonify(body)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, body["status"]


class APIError(Exception):
    """
    An error that already knows its HTTP rendering.

    Parameters
    ----------
    message : str
        Client-safe description.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str | None, optional
        Machine-readable identifier; defaults to the status name.
    details : dict[str, Any] | None, optional
        Structured payload included as ``details``.
    """

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code or self.status_code)
        self.code = code or status_code_name(self.status_code)
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem(self.status_code, self.message, code=self.code, details=self.details)


class BadRequest(APIError):
    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str = "Bad request", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class Forbidden(APIError):
    status_code = HTTPStatus.FORBIDDEN

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message)


def init_app(app: Flask) -> None:
    """
    Register the problem+json handlers.

    Notes
    -----
    - Service errors go through :meth:`BaseService.translate_exceptions`.
    - 4xx are logged as warnings, 5xx as errors with the traceback.
    """
    from makeshort.services._shared.base import BaseService
    from makeshort.services._shared.errors import ServiceError

    def _log(status: int, label: str, message: str, *, exc_info: bool = False) -> None:
        level = logging.ERROR if status >= 500 else logging.WARNING
        log.log(level, "%s: status=%s msg=%s", label, status, message, exc_info=exc_info)

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log(err.status_code, "APIError", err.message)
        return problem_response(err.to_problem())

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return handle_api_error(translated)
        return handle_unexpected_error(err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        _log(status, "HTTPException", message)
        return problem_response(problem(status, message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        _log(HTTPStatus.BAD_REQUEST, "ValidationError", "request body rejected")
        return problem_response(
            problem(
                HTTPStatus.BAD_REQUEST,
                "Validation failed",
                code="validation_error",
                details={"errors": err.normalized_messages()},
            )
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Constraint names are internal detail
        _log(HTTPStatus.CONFLICT, "IntegrityError", str(err.orig))
        return problem_response(problem(HTTPStatus.CONFLICT, "Resource conflict"))

    @app.errorhandler(OperationalError)
    @app.errorhandler(RedisError)
    def handle_store_unavailable(err: Exception):
        _log(HTTPStatus.SERVICE_UNAVAILABLE, type(err).__name__, "backing store unreachable", exc_info=True)
        return problem_response(
            problem(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        _log(HTTPStatus.INTERNAL_SERVER_ERROR, "Unhandled exception", type(err).__name__, exc_info=True)
        return problem_response(problem(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error"))
