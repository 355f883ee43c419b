"""JSON logging to stdout, correlated by request id.

Every record carries ``request_id``; service records add ``op`` and the
non-secret identifiers listed in :data:`EXTRA_KEYS`. Tokens, passwords and
password hashes are never passed to a logger.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
_INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

#: ``extra=`` attributes copied into the JSON line when present
EXTRA_KEYS = (
    "op",
    "user_id",
    "url_id",
    "alias",
    "backend",
    "endpoint",
    "method",
    "path",
    "status",
    "elapsed_ms",
)

access_log = logging.getLogger("makeshort.access")


def ensure_request_id() -> str:
    """Return the id of the current request, adopting an inbound header or minting a uuid4.

    Outside a request a fresh id is returned on every call.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        inbound = (request.headers.get(h) for h in _INBOUND_ID_HEADERS)
        request_id = next((v for v in inbound if v), None) or str(uuid4())
        g.request_id = request_id
    return request_id


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        line.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records emitted inside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = ensure_request_id() if has_request_context() else None
        return True


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout through :class:`JSONFormatter`."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Assign request ids, echo them as ``X-Request-ID`` and log one access line per request."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _start_request() -> None:
        ensure_request_id()
        g.request_started = time.perf_counter()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.get("request_started")
        access_log.info(
            "request completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 2) if started else None,
            },
        )
        return response


__all__ = ["REQUEST_ID_HEADER", "configure_logging", "ensure_request_id", "init_app"]
