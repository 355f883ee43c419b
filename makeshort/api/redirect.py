"""Public redirect endpoint mounted at the application root."""

from __future__ import annotations

from flask import Blueprint, redirect

from makeshort.api.deps import redirect_service

bp = Blueprint("redirect", __name__)


@bp.get("/<string:alias>")
def follow_alias(alias: str):
    """Permanently redirect ``/<alias>`` to its target and count the visit."""

    return redirect(redirect_service().resolve(alias), code=308)
