"""Domain models for live score links."""

from dataclasses import dataclass
from urllib.parse import urlparse

from mpl_site.errors import ValidationError

MATCH_TYPES = ("upcoming", "live", "completed", "records")
LIVE_SCORE_DOMAIN = "cricheroes.com"


@dataclass(frozen=True)
class LiveScoreLink:
    """Link to an externally hosted live scorecard."""

    id: str
    title: str
    url: str
    description: str = ""
    match_type: str = "upcoming"
    season: int | str | None = None
    date: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class LiveScoreDraft:
    """Form data for adding or editing a live score link."""

    title: str
    url: str
    description: str = ""
    match_type: str = "upcoming"
    season: int | str | None = None
    date: str = ""

    def validate(self) -> None:
        """Reject drafts without a title or a CricHeroes url."""
        if not self.title.strip() or not self.url.strip():
            raise ValidationError("Please fill title and URL")
        if not is_cricheroes_url(self.url):
            raise ValidationError("URL must be from CricHeroes domain")
        if self.match_type not in MATCH_TYPES:
            raise ValidationError(f"Unknown match type: {self.match_type}")


def is_cricheroes_url(url: str) -> bool:
    """Return True when the url points at the CricHeroes domain."""
    host = urlparse(url.strip()).hostname or ""
    return host == LIVE_SCORE_DOMAIN or host.endswith(f".{LIVE_SCORE_DOMAIN}")
