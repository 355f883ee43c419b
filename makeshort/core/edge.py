"""HTTP edge middleware: reverse-proxy header trust and CORS for ``/api``."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from makeshort.core.logger import REQUEST_ID_HEADER


def init_proxy(app: Flask) -> None:
    """Wrap the WSGI app in :class:`ProxyFix` unless ``USE_PROXYFIX`` is off.

    ``PROXYFIX_HOPS`` is the number of trusted ``X-Forwarded-*`` hops. The
    client address recorded on refresh sessions is ``request.remote_addr``
    after this rewrite, so a wrong hop count records the proxy instead.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXYFIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)


def init_cors(app: Flask) -> None:
    """Allow browser clients listed in ``CORS_ORIGINS`` to call ``/api/*``.

    The refresh cookie needs credentialed requests, which browsers refuse
    with a wildcard origin. A blank value or ``"*"`` therefore allows any
    origin without credentials; an explicit list allows credentials.
    Public redirects at the root are not covered.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    any_origin = not origins or origins == ["*"]
    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if any_origin else origins}},
        supports_credentials=not any_origin,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
