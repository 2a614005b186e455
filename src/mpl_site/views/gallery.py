"""Gallery page: category tabs, uploads and deletions."""

from dataclasses import dataclass

from mpl_site.domain.gallery import GalleryImage
from mpl_site.domain.uploads import PendingUpload
from mpl_site.services.auth_gate import AuthGate
from mpl_site.services.gallery import ALL_CATEGORIES, GalleryClient
from mpl_site.services.notifications import Confirm, Notifier, attempt, run_action
from mpl_site.services.uploads import ImageUploadService


@dataclass
class GalleryView:
    """Photo gallery filtered by the active tab."""

    gallery: GalleryClient
    uploads: ImageUploadService
    gate: AuthGate
    notifier: Notifier
    active_tab: str = ALL_CATEGORIES
    selected_season: int | None = None
    loading: bool = False

    @property
    def is_admin(self) -> bool:
        return self.gate.is_admin

    @property
    def uploading(self) -> bool:
        return self.uploads.upload_client.uploading

    @property
    def upload_category(self) -> str:
        """Uploads from the "all" tab land in the general category."""
        return "general" if self.active_tab == ALL_CATEGORIES else self.active_tab

    def visible_images(self) -> list[GalleryImage]:
        return self.gallery.filter(self.active_tab, self.selected_season)

    async def load(self) -> None:
        self.loading = True
        try:
            await self.gallery.fetch_all()
        finally:
            self.loading = False

    async def upload(self, file: PendingUpload | None) -> GalleryImage | None:
        if file is None:
            self.notifier.error("Please select an image first")
            return None
        return await run_action(
            self.notifier,
            lambda: self.uploads.add_gallery_image(
                file, category=self.upload_category, season=self.selected_season
            ),
            success="Image uploaded successfully!",
            failure="Upload failed. Please try again.",
        )

    async def delete(self, image_id: str, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete this image?"):
            return False
        return await attempt(
            self.notifier,
            lambda: self.gallery.remove(image_id),
            success="Image deleted successfully!",
        )
