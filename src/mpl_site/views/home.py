"""Home page: champion hero and live score links."""

import asyncio
from dataclasses import dataclass

from mpl_site.domain.live_scores import LiveScoreDraft, LiveScoreLink
from mpl_site.services.auth_gate import AuthGate
from mpl_site.services.live_scores import LiveScoresClient
from mpl_site.services.notifications import Confirm, Notifier, attempt, run_action
from mpl_site.services.winners import WinnersClient


@dataclass
class HomeView:
    """Public landing page with admin-editable live score links."""

    winners: WinnersClient
    live_scores: LiveScoresClient
    gate: AuthGate
    notifier: Notifier
    loading: bool = False

    @property
    def is_admin(self) -> bool:
        return self.gate.is_admin

    @property
    def last_season(self) -> int:
        return self.winners.latest()[0]

    @property
    def last_season_winner(self) -> str:
        return self.winners.latest()[1]

    @property
    def next_season(self) -> int:
        return self.last_season + 1

    def blank_link(self) -> LiveScoreDraft:
        """Empty form for a new link, targeting the coming season."""
        return LiveScoreDraft(title="", url="", season=self.next_season)

    async def load(self) -> None:
        self.loading = True
        try:
            await asyncio.gather(
                self.winners.fetch_all(), self.live_scores.fetch_all()
            )
        finally:
            self.loading = False

    async def save_link(
        self, draft: LiveScoreDraft, editing_id: str | None = None
    ) -> LiveScoreLink | None:
        """Add a new link, or update ``editing_id`` when given."""
        if editing_id is None:
            return await run_action(
                self.notifier,
                lambda: self.live_scores.create(draft),
                success="Live score link added!",
            )
        return await run_action(
            self.notifier,
            lambda: self.live_scores.save(editing_id, draft),
            success="Live score link updated!",
        )

    async def delete_link(self, link_id: str, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete this live score link?"):
            return False
        return await attempt(
            self.notifier,
            lambda: self.live_scores.remove(link_id),
            success="Live score link deleted!",
        )
