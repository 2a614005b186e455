"""Per-navigation verification of the admin session."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from mpl_site.adapters.mpl_api_client import AdminAuthClient
from mpl_site.errors import SiteError
from mpl_site.services.session import Session

ADMIN_PATH = "/admin"
LOGIN_PATH = "/admin/login"

_logger = logging.getLogger(__name__)


class AuthState(StrEnum):
    """Outcome of the current navigation's token check."""

    IDLE = "idle"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass
class AuthGate:
    """Decides, once per navigation, whether admin UI may be shown.

    Verification is fail-closed: a token the server does not positively
    confirm is discarded. Results of a check that was superseded by a later
    navigation are ignored.
    """

    session: Session
    auth_client: AdminAuthClient
    state: AuthState = AuthState.IDLE
    path: str = "/"
    _generation: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.session.subscribe(self._on_session_changed)

    @property
    def is_admin(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    @property
    def is_resolved(self) -> bool:
        """False while nothing, protected or public, should be rendered."""
        return self.state in {AuthState.AUTHENTICATED, AuthState.UNAUTHENTICATED}

    async def navigate(self, path: str) -> AuthState:
        """Record a route change and re-verify the session."""
        self.path = path
        self.state = AuthState.IDLE
        return await self.verify()

    async def verify(self) -> AuthState:
        """Check the stored token against the server."""
        self._generation += 1
        generation = self._generation
        token = self.session.token
        if token is None:
            self.state = AuthState.UNAUTHENTICATED
            return self.state

        self.state = AuthState.VERIFYING
        try:
            confirmed = await self.auth_client.verify(token)
        except SiteError as exc:
            _logger.warning("Token verification failed: %s", exc.message)
            confirmed = False

        if generation != self._generation:
            return self.state
        if confirmed:
            self.state = AuthState.AUTHENTICATED
        else:
            self.state = AuthState.UNAUTHENTICATED
            self.session.invalidate("token verification failed")
        return self.state

    def redirect_for(self, path: str) -> str | None:
        """Return where ``path`` should redirect to, if anywhere."""
        if not self.is_resolved:
            return None
        if path == ADMIN_PATH and not self.is_admin:
            return LOGIN_PATH
        if path == LOGIN_PATH and self.is_admin:
            return ADMIN_PATH
        return None

    def _on_session_changed(self, token: str | None) -> None:
        if token is None and self.state is not AuthState.IDLE:
            self.state = AuthState.UNAUTHENTICATED
