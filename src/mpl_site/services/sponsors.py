"""Sponsors collection, edited locally and saved as a whole."""

from dataclasses import dataclass, field

from mpl_site.domain.sponsors import Sponsor, SponsorDraft
from mpl_site.services.resources import EditableResourceClient


@dataclass
class SponsorsClient(EditableResourceClient[Sponsor]):
    """Sponsors ordered by ascending priority."""

    resource_name = "sponsors"
    load_failed_message = "Failed to load sponsors"

    _temp_counter: int = field(default=0, init=False, repr=False)

    def sort_records(self, records: list[Sponsor]) -> list[Sponsor]:
        return sorted(records, key=lambda sponsor: sponsor.priority)

    def add_local(self, draft: SponsorDraft) -> Sponsor:
        """Add a sponsor to the edit session; saved by ``commit``."""
        draft.validate()
        self.session.require_token()
        self._temp_counter += 1
        priority = max((item.priority for item in self.items), default=0) + 1
        sponsor = Sponsor(
            id=f"temp-{self._temp_counter}",
            sponsor_type=draft.sponsor_type,
            award_name=draft.award_name,
            sponsor_name=draft.sponsor_name,
            sponsor_details=draft.sponsor_details,
            priority=priority,
            is_active=True,
        )
        self._track(sponsor.id, None)
        self._append(sponsor)
        return sponsor

    def remove_local(self, sponsor_id: str) -> None:
        """Drop a sponsor from the edit session; saved by ``commit``."""
        self.session.require_token()
        index = self._index_of(sponsor_id)
        self._track(sponsor_id, self.items[index])
        self._touch()
        self.items = [*self.items[:index], *self.items[index + 1 :]]

    def _validate_commit(self) -> None:
        for sponsor in self.items:
            sponsor.validate()

    async def _push_changes(
        self, token: str, snapshot: list[Sponsor], dirty: set[str]
    ) -> None:
        await self.api_client.update_sponsors(token, snapshot)

    async def _after_commit(self) -> list[Sponsor]:
        return await self.fetch_all()

    async def _fetch(self) -> list[Sponsor]:
        return await self.api_client.list_sponsors()
