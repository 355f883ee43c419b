"""makeshort: URL shortener and account REST backend.

Expose :func:`makeshort.factory.create_app` at package level so WSGI servers
can load ``makeshort:create_app()`` directly.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
