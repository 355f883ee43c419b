"""HTTP layer: the versioned JSON API plus the public redirect route."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def _join_prefix(*segments: str) -> str:
    parts = [s.strip("/") for s in segments if s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount ``(blueprint, relative_prefix)`` pairs below ``base_prefix``.

    An empty relative prefix mounts the blueprint at ``base_prefix`` itself,
    e.g. ``(health_bp, "")`` under ``/api/v1`` serves ``/api/v1/health``.
    """
    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=_join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Register ``/api/v1`` and the root ``/<alias>`` redirect."""

    from makeshort.api.redirect import bp as redirect_bp
    from makeshort.api.v1 import API_VERSION, REGISTRY

    api_base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=f"{api_base}/{API_VERSION}", entries=REGISTRY)

    # Aliases are single path segments, so they never shadow /api/... routes
    app.register_blueprint(redirect_bp)


__all__ = ["init_app", "register_blueprint_group"]
