"""Domain models for award sponsors."""

from dataclasses import dataclass

from mpl_site.errors import ValidationError

SPONSOR_TYPES = ("title", "co-title", "post-match", "special")


@dataclass(frozen=True)
class Sponsor:
    """Sponsor attached to an award."""

    id: str
    sponsor_type: str
    award_name: str
    sponsor_name: str
    sponsor_details: str = ""
    priority: int = 0
    is_active: bool = True

    @property
    def is_committed(self) -> bool:
        """Whether the server has issued this sponsor's id."""
        return not self.id.startswith("temp-")

    def validate(self) -> None:
        """Reject sponsors missing the award or sponsor name."""
        if not self.award_name.strip() or not self.sponsor_name.strip():
            raise ValidationError("Please fill all required fields")


@dataclass(frozen=True)
class SponsorDraft:
    """Form data for a sponsor added during an edit session."""

    award_name: str
    sponsor_name: str
    sponsor_type: str = "post-match"
    sponsor_details: str = ""

    def validate(self) -> None:
        """Reject drafts missing the award or sponsor name."""
        if not self.award_name.strip() or not self.sponsor_name.strip():
            raise ValidationError("Please fill award name and sponsor name")
