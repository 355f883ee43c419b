"""
makeshort.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that the services depend on.

Modules
-------
- :mod:`token_manager`:
    :class:`~.TokenManager` issues token pairs and verifies access tokens.
- :mod:`session_store`:
    :class:`~.SessionStore` persists refresh sessions;
    :class:`~.InMemorySessionStore` is the process-local implementation.
- :mod:`hasher`:
    :class:`~.Hasher` turns passwords into stored credentials.

Concrete adapters (JWT, Redis, SQL, sha256) live under ``makeshort.infra``.
"""

from __future__ import annotations

from .hasher import Hasher
from .session_store import InMemorySessionStore, RefreshSession, SessionStore
from .token_manager import TokenClaims, TokenManager, TokenPair

__all__ = [
    "Hasher",
    "InMemorySessionStore",
    "RefreshSession",
    "SessionStore",
    "TokenClaims",
    "TokenManager",
    "TokenPair",
]
