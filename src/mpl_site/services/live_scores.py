"""Live score links collection."""

from dataclasses import dataclass

from mpl_site.domain.live_scores import LiveScoreDraft, LiveScoreLink
from mpl_site.services.resources import EditableResourceClient


@dataclass
class LiveScoresClient(EditableResourceClient[LiveScoreLink]):
    """Links to CricHeroes scorecards, in server order."""

    resource_name = "live_scores"
    load_failed_message = "Failed to load live score links"

    async def create(self, draft: LiveScoreDraft) -> LiveScoreLink:
        """Add a link."""
        draft.validate()
        async with self._writing("create") as token:
            link = await self.api_client.create_live_score(token, draft)
        self._append(link)
        return link

    async def save(self, link_id: str, draft: LiveScoreDraft) -> LiveScoreLink:
        """Replace a link's fields and save them straight away."""
        draft.validate()
        self.update(
            link_id,
            title=draft.title,
            url=draft.url,
            description=draft.description,
            match_type=draft.match_type,
            season=draft.season,
            date=draft.date,
        )
        await self.commit()
        return self.items[self._index_of(link_id)]

    async def remove(self, link_id: str) -> None:
        """Delete a link; the list updates before the server answers."""
        await self._remove(link_id, "remove", self.api_client.delete_live_score)
        self._untrack(link_id)

    def _validate_commit(self) -> None:
        for link_id in self._dirty:
            _draft_of(self.items[self._index_of(link_id)]).validate()

    async def _push_changes(
        self, token: str, snapshot: list[LiveScoreLink], dirty: set[str]
    ) -> None:
        for link in snapshot:
            if link.id in dirty:
                stored = await self.api_client.update_live_score(
                    token, link.id, _draft_of(link)
                )
                self._swap(link.id, stored)

    async def _fetch(self) -> list[LiveScoreLink]:
        return await self.api_client.list_live_scores()


def _draft_of(link: LiveScoreLink) -> LiveScoreDraft:
    return LiveScoreDraft(
        title=link.title,
        url=link.url,
        description=link.description,
        match_type=link.match_type,
        season=link.season,
        date=link.date,
    )
