"""Sponsors page with an admin edit mode."""

from collections.abc import Callable
from dataclasses import dataclass

from mpl_site.domain.sponsors import Sponsor, SponsorDraft
from mpl_site.errors import SiteError
from mpl_site.services.auth_gate import AuthGate
from mpl_site.services.notifications import Confirm, Notifier, attempt
from mpl_site.services.sponsors import SponsorsClient


@dataclass
class SponsorsView:
    """Sponsors by priority; admins edit locally and save all at once."""

    sponsors: SponsorsClient
    gate: AuthGate
    notifier: Notifier
    editing: bool = False
    loading: bool = False

    @property
    def is_admin(self) -> bool:
        return self.gate.is_admin

    @property
    def saving(self) -> bool:
        return self.sponsors.is_busy("commit")

    async def load(self) -> None:
        self.loading = True
        try:
            await self.sponsors.fetch_all()
        finally:
            self.loading = False

    def start_editing(self) -> bool:
        if not self.is_admin:
            self.notifier.error("Admin access required")
            return False
        self.editing = True
        return True

    def edit_field(self, sponsor_id: str, **changes: object) -> Sponsor | None:
        return self._local(lambda: self.sponsors.update(sponsor_id, **changes))

    def add_sponsor(self, draft: SponsorDraft) -> Sponsor | None:
        sponsor = self._local(lambda: self.sponsors.add_local(draft))
        if sponsor is not None:
            self.notifier.success("Sponsor added (Save to apply)")
        return sponsor

    def remove_sponsor(self, sponsor_id: str, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete this sponsor?"):
            return False
        try:
            self.sponsors.remove_local(sponsor_id)
        except SiteError as exc:
            self.notifier.error(exc.message)
            return False
        self.notifier.success("Sponsor removed (Save to apply)")
        return True

    async def save(self) -> bool:
        saved = await attempt(
            self.notifier,
            self.sponsors.commit,
            success="Sponsors updated successfully!",
        )
        if saved or not self.gate.session.is_active:
            self.editing = False
        return saved

    async def cancel(self) -> None:
        """Leave edit mode and restore the server's list."""
        self.editing = False
        await self.sponsors.discard_changes()

    def logout(self) -> None:
        self.gate.session.logout()
        self.editing = False
        self.notifier.success("Logged out successfully")

    def _local(self, change: Callable[[], Sponsor]) -> Sponsor | None:
        try:
            return change()
        except SiteError as exc:
            self.notifier.error(exc.message)
            return None
