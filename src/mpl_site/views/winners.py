"""Winners page: season history, new seasons and season photos."""

from dataclasses import dataclass

from mpl_site.domain.uploads import PendingUpload, UploadedImage
from mpl_site.domain.winners import Winner, WinnerDraft
from mpl_site.services.auth_gate import AuthGate
from mpl_site.services.notifications import Notifier, run_action
from mpl_site.services.uploads import ImageUploadService
from mpl_site.services.winners import WinnersClient


@dataclass
class WinnersView:
    """Season winners, newest first."""

    winners: WinnersClient
    uploads: ImageUploadService
    gate: AuthGate
    notifier: Notifier
    selected_season: int | None = None
    loading: bool = False

    @property
    def is_admin(self) -> bool:
        return self.gate.is_admin

    @property
    def uploading(self) -> bool:
        return self.uploads.upload_client.uploading

    @property
    def selected(self) -> Winner | None:
        if self.selected_season is None:
            return None
        return self.winners.get(str(self.selected_season))

    async def load(self) -> None:
        self.loading = True
        try:
            await self.winners.fetch_all()
        finally:
            self.loading = False
        if self.selected_season is None and self.winners.items:
            self.selected_season = self.winners.items[0].season

    async def add_season(self, draft: WinnerDraft) -> Winner | None:
        winner = await run_action(
            self.notifier,
            lambda: self.winners.create(draft),
            success="New season added successfully!",
            failure="Failed to add season",
        )
        if winner is not None:
            self.selected_season = winner.season
        return winner

    async def upload_image(
        self, file: PendingUpload, season: int
    ) -> UploadedImage | None:
        return await run_action(
            self.notifier,
            lambda: self.uploads.set_winner_image(file, season),
            success="Image uploaded successfully!",
            failure="Upload failed. Please try again.",
        )
