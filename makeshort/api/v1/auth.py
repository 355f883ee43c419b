"""Authentication endpoints: signup, session open/close, refresh rotation."""

from __future__ import annotations

from flask import Blueprint, after_this_request, request

from makeshort.api.deps import (
    auth_service,
    clear_refresh_cookie,
    client_info,
    json_response,
    refresh_cookie,
    set_refresh_cookie,
    timing,
)
from makeshort.core.errors import BadRequest, Unauthorized
from makeshort.schemas import LoginSchema, SignupSchema, TokenPairSchema, UserSchema
from makeshort.services.auth.dto import LoginIn, SignupIn

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
login_schema = LoginSchema()
token_schema = TokenPairSchema()
user_schema = UserSchema()


@bp.post("/signup")
@timing
def signup():
    """Register a new account."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    user = auth_service().register(SignupIn(**data))
    return json_response(user_schema.dump(user), status=201)


@bp.post("/session")
@timing
def login():
    """Open a session: return both tokens and set the refresh cookie."""

    data = login_schema.load(request.get_json(silent=True) or {})
    pair = auth_service().login(LoginIn(**data), client_info())
    response = json_response(token_schema.dump(pair))
    return set_refresh_cookie(response, pair.refresh_token)


@bp.delete("/session")
@timing
def logout():
    """Close the session named by the refresh cookie; the cookie is always cleared."""

    token = refresh_cookie()
    if token is None:
        raise BadRequest("Missing refresh token cookie")

    # Runs for error responses too, so a stale cookie never survives
    after_this_request(clear_refresh_cookie)
    auth_service().logout(token)
    return json_response({"message": "Session closed"})


@bp.post("/refresh")
@timing
def refresh():
    """Rotate the refresh token and issue a new pair."""

    token = refresh_cookie()
    if token is None:
        raise Unauthorized("Missing refresh token cookie")
    pair = auth_service().refresh(token, client_info())
    response = json_response(token_schema.dump(pair))
    return set_refresh_cookie(response, pair.refresh_token)
