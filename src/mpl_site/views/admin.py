"""Admin login form and admin panel."""

import logging
from dataclasses import dataclass, field
from datetime import date

from mpl_site.domain.gallery import GalleryImage
from mpl_site.domain.uploads import PendingUpload, UploadedImage
from mpl_site.errors import AuthError, SiteError
from mpl_site.services.auth_gate import ADMIN_PATH, AuthGate
from mpl_site.services.gallery import GalleryClient
from mpl_site.services.notifications import Confirm, Notifier, attempt, run_action
from mpl_site.services.session import Session
from mpl_site.services.sponsors import SponsorsClient
from mpl_site.services.uploads import ImageUploadService
from mpl_site.services.winners import WinnersClient

ADMIN_FOLDERS = ("gallery", "winners", "matches", "sponsors")
RECENT_IMAGES = 20
DEFAULT_SPONSORS_COUNT = 13

_logger = logging.getLogger(__name__)


@dataclass
class LoginView:
    """Password form that starts an admin session."""

    session: Session
    gate: AuthGate
    notifier: Notifier
    loading: bool = False

    async def submit(self, password: str) -> bool:
        """Log in and move to the admin panel; True on success."""
        if self.loading:
            return False
        self.loading = True
        try:
            await self.session.login(password)
        except AuthError as exc:
            self.notifier.error(exc.message)
            return False
        except SiteError as exc:
            _logger.warning("Login failed: %s", exc.message)
            self.notifier.error(exc.message or "Login failed")
            return False
        finally:
            self.loading = False
        self.notifier.success("Login successful!")
        await self.gate.navigate(ADMIN_PATH)
        return True


@dataclass(frozen=True)
class AdminStats:
    """Counters shown at the top of the admin panel."""

    gallery_count: int
    winners_count: int
    sponsors_count: int
    uploads_today: int


@dataclass
class AdminPanelView:
    """Dashboard for uploads and recent gallery images."""

    gallery: GalleryClient
    winners: WinnersClient
    sponsors: SponsorsClient
    uploads: ImageUploadService
    session: Session
    notifier: Notifier
    _upload_days: list[date] = field(default_factory=list, init=False, repr=False)

    @property
    def recent_images(self) -> list[GalleryImage]:
        return self.gallery.items[:RECENT_IMAGES]

    @property
    def uploading(self) -> bool:
        return self.uploads.upload_client.uploading

    async def load(self) -> None:
        await self.gallery.fetch_all()
        await self.winners.fetch_all()

    def stats(self) -> AdminStats:
        today = date.today()
        return AdminStats(
            gallery_count=len(self.gallery.items),
            winners_count=len(self.winners.items),
            sponsors_count=len(self.sponsors.items) or DEFAULT_SPONSORS_COUNT,
            uploads_today=sum(1 for day in self._upload_days if day == today),
        )

    async def upload(  # noqa: PLR0913
        self,
        file: PendingUpload | None,
        *,
        folder: str = "gallery",
        title: str = "",
        category: str = "general",
        season: int | None = None,
    ) -> GalleryImage | UploadedImage | None:
        """Upload into a folder; gallery uploads are also listed in the gallery."""
        if file is None:
            self.notifier.error("Please select a file first")
            return None
        if folder not in ADMIN_FOLDERS:
            self.notifier.error(f"Unknown folder: {folder}")
            return None
        result: GalleryImage | UploadedImage | None
        if folder == "gallery":
            result = await run_action(
                self.notifier,
                lambda: self.uploads.add_gallery_image(
                    file, title=title or None, category=category, season=season
                ),
                success="Image uploaded to Cloudinary successfully!",
            )
        elif folder == "winners" and season is not None:
            result = await run_action(
                self.notifier,
                lambda: self.uploads.set_winner_image(file, season),
                success="Image uploaded to Cloudinary successfully!",
            )
        else:
            result = await run_action(
                self.notifier,
                lambda: self.uploads.upload_only(file, folder),
                success="Image uploaded to Cloudinary successfully!",
            )
        if result is not None:
            self._upload_days.append(date.today())
        return result

    async def delete_image(self, image_id: str, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete this image?"):
            return False
        return await attempt(
            self.notifier,
            lambda: self.gallery.remove(image_id),
            success="Image deleted successfully!",
        )

    def logout(self) -> None:
        self.session.logout()
        self.notifier.success("Logged out successfully")
