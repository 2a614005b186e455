"""Domain models for season winners."""

from dataclasses import dataclass

from mpl_site.errors import ValidationError


@dataclass(frozen=True)
class Winner:
    """Champion record for one season."""

    season: int
    team_name: str
    captain: str | None = None
    runner_up: str | None = None
    third_place: str | None = None
    highlights: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class WinnerDraft:
    """Form data for adding a new season."""

    season: int
    team_name: str
    captain: str = ""
    runner_up: str = ""
    third_place: str = ""
    highlights: str = ""

    def validate(self) -> None:
        """Reject drafts missing the season number or team name."""
        if not self.team_name.strip():
            raise ValidationError("Please fill season number and team name")
        if isinstance(self.season, bool) or not isinstance(self.season, int):
            raise ValidationError("Please enter a valid season number")
        if self.season < 1:
            raise ValidationError("Please enter a valid season number")
