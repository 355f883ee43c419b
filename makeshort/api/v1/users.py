"""User endpoints: public profile, self-deletion and self URL listing."""

from __future__ import annotations

from flask import Blueprint

from makeshort.api.deps import json_response, require_auth, timing, url_service, user_service
from makeshort.schemas import URLSchema, UserSchema

bp = Blueprint("users", __name__)

user_schema = UserSchema()
urls_schema = URLSchema(many=True)


@bp.get("/<int:user_id>")
@timing
def get_user(user_id: int):
    """Return the public profile of a user."""

    return json_response(user_schema.dump(user_service().get_user(user_id)))


@bp.delete("/<int:user_id>")
@timing
@require_auth
def delete_user(user_id: int, *, actor_id: int):
    """Delete the caller's own account, its URLs and sessions."""

    user_service().delete_user(actor_id, user_id)
    return json_response({"message": "User deleted"})


@bp.get("/<int:user_id>/urls")
@timing
@require_auth
def list_user_urls(user_id: int, *, actor_id: int):
    """List the caller's URLs; always 200 with a possibly empty array."""

    urls = url_service().list_for_owner(actor_id, user_id)
    return json_response(urls_schema.dump(urls))
