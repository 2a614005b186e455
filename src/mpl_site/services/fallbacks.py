"""Static data shown when a public read fails."""

from dataclasses import dataclass, field

from mpl_site.domain.contacts import Contact
from mpl_site.domain.live_scores import LiveScoreLink

DEFAULT_CONTACTS: tuple[Contact, ...] = (
    Contact(name="Marella Rosi Reddy", phone="9908999817"),
    Contact(name="Marella Krishna Reddy", phone="9989668139"),
    Contact(name="Marella Narasimha Reddy", phone="9700451818"),
    Contact(name="Potlapalli Nasar Reddy", phone="7989624919"),
    Contact(name="Marella Nagi Reddy", phone="9000064339"),
)

DEFAULT_LIVE_SCORES: tuple[LiveScoreLink, ...] = (
    LiveScoreLink(
        id="1",
        title="Season 14 Opening Match",
        url="https://cricheroes.com/mpl-season14",
        description="Watch live scores and updates",
        match_type="upcoming",
        season=14,
        date="2024-02-15",
    ),
    LiveScoreLink(
        id="2",
        title="MPL All-Time Records",
        url="https://cricheroes.com/mpl-records",
        description="View player statistics and records",
        match_type="records",
        season="all",
        date="2024-02-10",
    ),
)


def _default_sets() -> dict[str, tuple[object, ...]]:
    return {"contacts": DEFAULT_CONTACTS, "live_scores": DEFAULT_LIVE_SCORES}


@dataclass
class FallbackPolicy:
    """Maps resource names to the canned collection used when loading fails."""

    defaults: dict[str, tuple[object, ...]] = field(default_factory=_default_sets)

    def defaults_for(self, resource: str) -> list[object] | None:
        """Return a fresh copy of the default set, or None if there is none."""
        records = self.defaults.get(resource)
        if records is None:
            return None
        return list(records)
