"""Short URL endpoints (authenticated, owner-checked)."""

from __future__ import annotations

from flask import Blueprint, request

from makeshort.api.deps import json_response, require_auth, timing, url_service
from makeshort.schemas import URLCreatedSchema, URLCreateSchema, URLSchema, URLUpdateSchema
from makeshort.services.urls.dto import URLCreateIn, URLUpdateIn

bp = Blueprint("urls", __name__)

create_schema = URLCreateSchema()
update_schema = URLUpdateSchema()
created_schema = URLCreatedSchema()
url_schema = URLSchema()


@bp.post("")
@timing
@require_auth
def create_url(*, actor_id: int):
    """Shorten a URL for the caller."""

    data = create_schema.load(request.get_json(silent=True) or {})
    url = url_service().create(actor_id, URLCreateIn(long_url=data["url"], alias=data.get("alias")))
    return json_response(created_schema.dump(url), status=201)


@bp.patch("/<int:url_id>")
@timing
@require_auth
def update_url(url_id: int, *, actor_id: int):
    """Change the target and/or alias of one of the caller's URLs."""

    data = update_schema.load(request.get_json(silent=True) or {})
    url = url_service().update(
        actor_id, url_id, URLUpdateIn(long_url=data.get("url"), alias=data.get("alias"))
    )
    return json_response(url_schema.dump(url))


@bp.delete("/<int:url_id>")
@timing
@require_auth
def delete_url(url_id: int, *, actor_id: int):
    """Delete one of the caller's URLs."""

    url_service().delete(actor_id, url_id)
    return json_response({"message": "URL deleted"})
