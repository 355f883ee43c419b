from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class TokenPair:
    """Access token plus opaque refresh token handed to the client."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: int
    issued_at: datetime
    expires_at: datetime


class TokenManager(Protocol):
    """Port for issuing token pairs and verifying access tokens.

    Implementations hold no persistent state; refresh-token state lives in a
    :class:`~makeshort.services._shared.ports.session_store.SessionStore`.
    """

    def issue_pair(self, user_id: int) -> TokenPair:
        """Sign a new access token for ``user_id`` and mint a refresh token."""

    def parse_access(self, raw_token: str) -> TokenClaims:
        """
        Verify signature, algorithm, type and expiry of an access token.

        :raises InvalidTokenError: On any verification failure.
        """

    def new_refresh_token(self) -> str:
        """Generate a new random, unguessable refresh token."""
        return uuid4().hex
