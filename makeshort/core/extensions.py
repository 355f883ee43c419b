"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

if TYPE_CHECKING:
    from makeshort.services._shared.ports import Hasher, SessionStore, TokenManager

# Global naming convention for all constraints
#   %(table_name)s, %(column_0_name)s, %(referred_table_name)s
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None

EXTENSION_KEY = "makeshort"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the auth collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`makeshort.models` package to ensure SQLAlchemy metadata is ready
        for migrations, then builds the token manager, hasher and session
        store chosen by ``SESSION_BACKEND``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from makeshort import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    global redis_client
    if app.config.get("SESSION_BACKEND") == "redis":
        redis_url = app.config["REDIS_URL"]
        redis_client = redis.Redis.from_url(redis_url)
        try:
            redis_client.ping()
        except RedisError as exc:
            raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
        app.extensions["redis_client"] = redis_client
    else:
        redis_client = None
        app.extensions.pop("redis_client", None)

    from makeshort.infra.crypto.sha256_hasher import SaltedSHA256Hasher
    from makeshort.infra.jwt.token_manager import JWTTokenManager

    app.extensions[EXTENSION_KEY] = {
        "token_manager": JWTTokenManager(access_ttl=app.config["JWT_ACCESS_TOKEN_EXPIRES"]),
        "hasher": SaltedSHA256Hasher(salt=app.config["HASH_SALT"]),
        "session_store": _build_session_store(app),
    }


def _build_session_store(app: Flask) -> SessionStore:
    ttl = app.config["REFRESH_TOKEN_TTL"]
    backend = app.config.get("SESSION_BACKEND")
    if backend == "redis":
        from makeshort.infra.redis.redis_session_store import RedisSessionStore

        return RedisSessionStore(get_redis(), ttl=ttl)
    if backend == "database":
        from makeshort.infra.sql.sql_session_store import SQLSessionStore

        return SQLSessionStore(ttl=ttl)
    from makeshort.services._shared.ports import InMemorySessionStore

    return InMemorySessionStore(ttl=ttl)


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return redis_client


def get_token_manager() -> TokenManager:
    """Return the token manager bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]["token_manager"]


def get_hasher() -> Hasher:
    """Return the credential hasher bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]["hasher"]


def get_session_store() -> SessionStore:
    """Return the refresh-session store bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]["session_store"]
