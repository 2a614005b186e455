"""Admin token storage abstractions."""

from dataclasses import dataclass
from typing import Protocol


class TokenStore(Protocol):
    """Holder of the single admin bearer token."""

    def get(self) -> str | None:
        """Return the stored token, if any."""

    def set(self, token: str) -> None:
        """Store the token, replacing any previous one."""

    def clear(self) -> None:
        """Forget the stored token."""


@dataclass
class InMemoryTokenStore(TokenStore):
    """Token store that lives only as long as the process."""

    token: str | None = None

    def get(self) -> str | None:
        return self.token

    def set(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None
