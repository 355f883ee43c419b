"""Version 1 of the JSON API.

Routes
------
``/health``
    Liveness plus database and session-store checks.
``/auth``
    Signup, session open/close (refresh cookie) and token rotation.
``/url``
    Create, patch and delete the caller's short URLs.
``/user``
    Public profiles, self-deletion and the caller's URL listing.
"""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

from .auth import bp as auth_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .urls import bp as urls_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# (blueprint, prefix under /api/v1)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, "/auth"),
    (urls_bp, "/url"),
    (users_bp, "/user"),
]
