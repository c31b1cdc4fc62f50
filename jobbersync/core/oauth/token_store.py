"""In-memory holder for the Jobber access token.

One ``TokenStore`` lives for the lifetime of the process and is handed to
the OAuth routes through a dependency. Nothing is persisted: a restart
drops the token and the operator has to authorize again.
"""

from __future__ import annotations

import asyncio
import enum
import hmac
import secrets


class AuthState(str, enum.Enum):
    UNAUTHORIZED = "unauthorized"
    AUTHORIZATION_PENDING = "authorization_pending"
    AUTHORIZED = "authorized"


class TokenStore:
    def __init__(self, access_token: str | None = None) -> None:
        self._access_token = access_token or None
        self._pending_state: str | None = None
        self._lock = asyncio.Lock()

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def state(self) -> AuthState:
        if self._access_token:
            return AuthState.AUTHORIZED
        if self._pending_state:
            return AuthState.AUTHORIZATION_PENDING
        return AuthState.UNAUTHORIZED

    @property
    def is_authorized(self) -> bool:
        return self.state is AuthState.AUTHORIZED

    async def begin_authorization(self) -> str:
        """Enter the pending state and return a fresh anti-forgery ``state`` value."""
        async with self._lock:
            self._pending_state = secrets.token_urlsafe(32)
            return self._pending_state

    def verify_state(self, value: str | None) -> bool:
        # Callbacks without a state are accepted; a mismatched one is not
        if value is None:
            return True
        if self._pending_state is None:
            return False
        return hmac.compare_digest(value, self._pending_state)

    async def set_token(self, token: str) -> None:
        async with self._lock:
            self._access_token = token
            self._pending_state = None

    async def clear(self) -> None:
        async with self._lock:
            self._access_token = None
            self._pending_state = None
