"""
Authentication Service

Session-level wrapper over the identity provider: keeps the last known
signed-in user and notifies subscribers on every state transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from talenteval.core.errors import AuthFailureError

from .client import AuthUser, IdentityClient

logger = logging.getLogger(__name__)

AuthStateCallback = Callable[[AuthUser | None], None]


class SessionPersistence(StrEnum):
    """How long a signed-in session survives."""

    LOCAL = "LOCAL"  # survives browser restarts
    SESSION = "SESSION"  # ends with the browser session


class AuthService:
    """Register, sign in, sign out and track the current user."""

    def __init__(self, client: IdentityClient):
        self._client = client
        self._current_user: AuthUser | None = None
        self._listeners: list[AuthStateCallback] = []
        self.persistence = SessionPersistence.SESSION

    @property
    def current_user(self) -> AuthUser | None:
        """Last known signed-in user (None when signed out)."""
        return self._current_user

    async def register(self, email: str, password: str) -> AuthUser:
        """Create an account, send a verification notice and sign the user in."""
        user = await self._client.sign_up(email, password)
        if user.id_token:
            await self._client.send_email_verification(user.id_token)
        logger.info(f"User registered: {user.uid}")
        self._set_user(user)
        return user

    async def login(self, email: str, password: str, remember: bool = False) -> AuthUser:
        """Sign in; `remember` selects LOCAL persistence instead of SESSION."""
        user = await self._client.sign_in(email, password)
        self.persistence = SessionPersistence.LOCAL if remember else SessionPersistence.SESSION
        logger.info(f"User signed in: {user.uid}", extra={"persistence": self.persistence.value})
        self._set_user(user)
        return user

    async def logout(self) -> None:
        if self._current_user is not None:
            logger.info(f"User signed out: {self._current_user.uid}")
        self._set_user(None)

    async def reset_password(self, email: str) -> None:
        """Ask the provider to send a reset notice. Delivery is not confirmed."""
        await self._client.send_password_reset(email)

    async def verify_token(self, id_token: str) -> AuthUser:
        """Resolve a bearer token and adopt it as the current user."""
        if not id_token:
            raise AuthFailureError("MISSING_ID_TOKEN")
        user = await self._client.lookup(id_token)
        self._set_user(user)
        return user

    def subscribe(self, callback: AuthStateCallback) -> Callable[[], None]:
        """Register a callback for auth state changes.

        The callback fires immediately with the current state, then on every
        transition.

        Returns:
            A function that removes the callback
        """
        self._listeners.append(callback)
        callback(self._current_user)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_user(self, user: AuthUser | None) -> None:
        self._current_user = user
        for listener in list(self._listeners):
            listener(user)
