"""Admin session shared by every view."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from mpl_site.adapters.mpl_api_client import AdminAuthClient
from mpl_site.errors import AuthError, ValidationError
from mpl_site.services.tokens import TokenStore

SessionListener = Callable[[str | None], None]

_logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Owns the admin token and announces every change to it."""

    store: TokenStore
    auth_client: AdminAuthClient
    _listeners: list[SessionListener] = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def token(self) -> str | None:
        return self.store.get()

    @property
    def is_active(self) -> bool:
        return self.token is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called with the new token (or None)."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def login(self, password: str) -> None:
        """Exchange the admin password for a token and store it."""
        if not password.strip():
            raise ValidationError("Please enter the admin password")
        token = await self.auth_client.login(password)
        self.store.set(token)
        _logger.info("Admin session started")
        self._changed(token)

    def logout(self) -> None:
        """End the session at the viewer's request."""
        self.store.clear()
        _logger.info("Admin session ended by logout")
        self._changed(None)

    def invalidate(self, reason: str) -> None:
        """Drop a token the server no longer accepts."""
        if self.store.get() is None:
            return
        self.store.clear()
        _logger.info("Admin session invalidated: %s", reason)
        self._changed(None)

    def require_token(self) -> str:
        """Return the token for a protected call or fail without a request."""
        token = self.token
        if token is None:
            raise AuthError("Admin access required")
        return token

    def _changed(self, token: str | None) -> None:
        for listener in list(self._listeners):
            listener(token)
