# makeshort/services/auth/service.py
from __future__ import annotations

import logging

from marshmallow import ValidationError as MarshmallowValidationError
from marshmallow import validate

from makeshort.models.user import normalize_email
from makeshort.repositories.user import UserRepository
from makeshort.services._shared.base import BaseService
from makeshort.services._shared.errors import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    SessionNotFoundError,
    ValidationError,
)
from makeshort.services._shared.ports import Hasher, SessionStore, TokenManager
from makeshort.services.auth.dto import (
    ClientInfo,
    LoginIn,
    SignupIn,
    TokenPairOut,
    UserPublicOut,
)

log = logging.getLogger(__name__)

_email_validator = validate.Email(error="Invalid email address")


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / logout / refresh).

    Refresh tokens are opaque and stateful: each one is bound to a server-side
    session in the :class:`SessionStore`. Refresh rotates by closing the old
    session *before* issuing and storing the new one, so a replayed token
    always fails.

    Raw tokens, passwords and hashes never reach the logs.
    """

    def __init__(
        self,
        *,
        token_manager: TokenManager,
        session_store: SessionStore,
        hasher: Hasher,
    ) -> None:
        """
        :param token_manager: Issues token pairs.
        :param session_store: Stateful store for refresh sessions.
        :param hasher: Deterministic password hasher.
        """
        self.tokens = token_manager
        self.sessions = session_store
        self.hasher = hasher

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: SignupIn) -> UserPublicOut:
        """
        Create a new account.

        :param dto: Registration input.
        :returns: Public projection of the new user.
        :raises ValidationError: If email, username or password is unusable.
        :raises UserAlreadyExistsError: If email or username is taken.
        """
        email = normalize_email(dto.email or "")
        try:
            _email_validator(email)
        except MarshmallowValidationError as exc:
            raise ValidationError("Invalid email address") from exc
        if not dto.username or not dto.username.strip():
            raise ValidationError("Username is required")
        if not dto.password:
            raise ValidationError("Password is required")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.create(
                email=email,
                username=dto.username,
                password_hash=self.hasher.hash(dto.password),
            )
            out = UserPublicOut(id=user.id, email=user.email, username=user.username)

        log.info("user registered", extra={"op": "auth.register", "user_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn, client: ClientInfo | None = None) -> TokenPairOut:
        """
        Authenticate credentials, issue a pair and open a refresh session.

        :param dto: Login input.
        :param client: Client address and user agent recorded on the session.
        :returns: Access/refresh token pair.
        :raises InvalidCredentialsError: If no user matches email and password.
        """
        client = client or ClientInfo()
        password_hash = self.hasher.hash(dto.password or "")

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_credentials(dto.email or "", password_hash)
            if user is None:
                log.info("login rejected", extra={"op": "auth.login"})
                raise InvalidCredentialsError()
            user_id = user.id

        pair = self.tokens.issue_pair(user_id)
        self.sessions.create(
            refresh_token=pair.refresh_token,
            user_id=user_id,
            ip=client.ip,
            user_agent=client.user_agent,
        )
        log.info("session opened", extra={"op": "auth.login", "user_id": user_id})
        return TokenPairOut(access_token=pair.access_token, refresh_token=pair.refresh_token)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str) -> None:
        """
        Close the session bound to ``refresh_token``.

        :raises SessionNotFoundError: If it is absent, expired or already closed.
        """
        if not refresh_token:
            raise SessionNotFoundError()
        self.sessions.close(refresh_token)
        log.info("session closed", extra={"op": "auth.logout"})

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str, client: ClientInfo | None = None) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        Sequence: ``get`` -> ``close`` (old token dies here) -> ``issue_pair``
        -> ``create``. A failure after ``close`` leaves the client without a
        session; it never leaves the old token usable.

        :raises InvalidRefreshTokenError: If the token has no live session, or
            a concurrent refresh consumed it first.
        """
        client = client or ClientInfo()
        if not refresh_token:
            raise InvalidRefreshTokenError()
        try:
            session = self.sessions.get(refresh_token)
            self.sessions.close(refresh_token)
        except SessionNotFoundError as exc:
            log.info("refresh rejected", extra={"op": "auth.refresh"})
            raise InvalidRefreshTokenError() from exc

        pair = self.tokens.issue_pair(session.user_id)
        self.sessions.create(
            refresh_token=pair.refresh_token,
            user_id=session.user_id,
            ip=client.ip,
            user_agent=client.user_agent,
        )
        log.info("session rotated", extra={"op": "auth.refresh", "user_id": session.user_id})
        return TokenPairOut(access_token=pair.access_token, refresh_token=pair.refresh_token)
