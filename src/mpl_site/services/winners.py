"""Season winners collection."""

from dataclasses import dataclass, replace

from mpl_site.domain.uploads import UploadedImage
from mpl_site.domain.winners import Winner, WinnerDraft
from mpl_site.errors import ConflictError
from mpl_site.services.resources import ResourceClient

DEFAULT_LATEST_SEASON = 13
DEFAULT_LATEST_CHAMPION = "Edara"


@dataclass
class WinnersClient(ResourceClient[Winner]):
    """Winners keyed by season, newest season first."""

    resource_name = "winners"
    load_failed_message = "Failed to load winners"

    def record_id(self, record: Winner) -> str:
        return str(record.season)

    def sort_records(self, records: list[Winner]) -> list[Winner]:
        return sorted(records, key=lambda winner: winner.season, reverse=True)

    async def create(self, draft: WinnerDraft) -> Winner:
        """Add a season; duplicates are refused before reaching the server."""
        draft.validate()
        if self.get(str(draft.season)) is not None:
            raise ConflictError(f"Season {draft.season} already exists")
        async with self._writing("create") as token:
            winner = await self.api_client.add_winner(token, draft)
        self._touch()
        self.items = self.sort_records([*self.items, winner])
        return winner

    async def attach_image(self, season: int, image: UploadedImage) -> Winner | None:
        """Register an uploaded image as the season's photo."""
        async with self._writing(f"image:{season}") as token:
            await self.api_client.set_winner_image(
                token, season, image.url, image.external_id
            )
        current = self.get(str(season))
        if current is None:
            return None
        updated = replace(current, image_url=image.url)
        self._swap(str(season), updated)
        return updated

    def latest(self) -> tuple[int, str]:
        """Return the most recent season and its champion."""
        if not self.items:
            return DEFAULT_LATEST_SEASON, DEFAULT_LATEST_CHAMPION
        newest = max(self.items, key=lambda winner: winner.season)
        return newest.season, newest.team_name

    async def _fetch(self) -> list[Winner]:
        return await self.api_client.list_winners()
