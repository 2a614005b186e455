"""File-backed storage for the admin bearer token."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mpl_site.services.tokens import TokenStore

_TOKEN_KEY = "adminToken"

_logger = logging.getLogger(__name__)


@dataclass
class FileTokenStore(TokenStore):
    """Keeps the token in a single JSON file readable only by its owner."""

    path: Path

    def get(self) -> str | None:
        """Return the stored token, if any."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Ignoring unreadable token file at %s", self.path)
            return None
        token = data.get(_TOKEN_KEY) if isinstance(data, dict) else None
        if isinstance(token, str) and token:
            return token
        return None

    def set(self, token: str) -> None:
        """Persist the token, replacing any previous one."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(f"{self.path.name}.tmp")
        staging.write_text(json.dumps({_TOKEN_KEY: token}), encoding="utf-8")
        os.chmod(staging, 0o600)
        staging.replace(self.path)

    def clear(self) -> None:
        """Remove the stored token."""
        self.path.unlink(missing_ok=True)
