"""Session store: identity, token and the loading flag.

States are ``loading``, ``unauthenticated`` and ``authenticated``. The store
starts in ``loading`` only when a token was persisted by an earlier run. Any
401 reported by the API client on an authenticated call is a forced logout,
which is re-emitted to the listeners registered here.
"""

from __future__ import annotations

import logging
from typing import Callable

from kadai.api import ApiClient
from kadai.constant import (
    MSG_LOGIN_FAILED,
    MSG_REGISTER_FAILED,
    ROLE_BUYER,
    SESSION_AUTHENTICATED,
    SESSION_LOADING,
    SESSION_UNAUTHENTICATED,
)
from kadai.errors import ApiError
from kadai.models import AuthResult, Identity
from kadai.persistence import TokenStore

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, client: ApiClient, storage: TokenStore) -> None:
        self.client = client
        self.storage = storage
        self.identity: Identity | None = None
        self.token: str | None = storage.load()
        self.loading = self.token is not None
        self._forced_logout_listeners: list[Callable[[], None]] = []

        client.token_provider = lambda: self.token
        client.on_unauthorized = self._force_logout

    @property
    def state(self) -> str:
        if self.loading:
            return SESSION_LOADING
        if self.identity is None:
            return SESSION_UNAUTHENTICATED
        return SESSION_AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def is_seller(self) -> bool:
        return self.identity is not None and self.identity.is_seller

    @property
    def is_buyer(self) -> bool:
        return self.identity is not None and self.identity.is_buyer

    def add_forced_logout_listener(self, callback: Callable[[], None]) -> None:
        self._forced_logout_listeners.append(callback)

    async def initialize(self) -> None:
        """Resolve the persisted token into an identity, or drop it."""
        if self.token is None:
            self.loading = False
            return

        self.loading = True
        try:
            self.identity = await self.client.fetch_identity()
            logger.info("session_restored user=%s role=%s", self.identity.username, self.identity.role)
        except ApiError as exc:
            logger.info("session_restore_failed error=%r", exc)
            self.logout()
        finally:
            self.loading = False

    async def login(self, username: str, password: str) -> AuthResult:
        self.loading = True
        try:
            token, identity = await self.client.login(username, password)
            if identity is None:
                identity = await self.client.fetch_identity(token=token)
            self.token = token
        except ApiError as exc:
            self.token = None
            logger.info("login_failed user=%s status=%s", username, exc.status)
            return AuthResult(success=False, error=exc.message or MSG_LOGIN_FAILED)
        finally:
            self.loading = False

        self.identity = identity
        self.storage.save(token)
        logger.info("login user=%s role=%s", identity.username, identity.role)
        return AuthResult(success=True)

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        try:
            created = await self.client.register(username, email, password, role=ROLE_BUYER)
        except ApiError as exc:
            messages = tuple(exc.messages)
            error = ", ".join(messages) if messages else MSG_REGISTER_FAILED
            logger.info("register_failed user=%s status=%s", username, exc.status)
            return AuthResult(success=False, error=error, errors=messages)

        logger.info("register user=%s", username)
        return AuthResult(success=True, data=created if isinstance(created, dict) else None)

    def logout(self) -> None:
        self.token = None
        self.identity = None
        self.loading = False
        self.storage.clear()

    def _force_logout(self) -> None:
        was_authenticated = self.is_authenticated
        self.logout()
        logger.info("forced_logout was_authenticated=%s", was_authenticated)
        for callback in list(self._forced_logout_listeners):
            callback()
