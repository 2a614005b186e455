"""Gallery images collection."""

from dataclasses import dataclass

from mpl_site.domain.gallery import GalleryImage, GalleryImageDraft
from mpl_site.services.resources import ResourceClient

ALL_CATEGORIES = "all"


@dataclass
class GalleryClient(ResourceClient[GalleryImage]):
    """Gallery images in server order, optionally capped at ``limit``."""

    resource_name = "gallery"
    load_failed_message = "Failed to load gallery images"

    limit: int | None = None

    async def create(self, draft: GalleryImageDraft) -> GalleryImage:
        """Register an uploaded image."""
        draft.validate()
        async with self._writing("create") as token:
            image = await self.api_client.add_gallery_image(token, draft)
        self._append(image)
        return image

    async def remove(self, image_id: str) -> None:
        """Delete an image record; the list updates before the server answers."""
        await self._remove(image_id, "remove", self.api_client.delete_gallery_image)

    def filter(
        self, category: str = ALL_CATEGORIES, season: int | None = None
    ) -> list[GalleryImage]:
        """Return images matching a category tab and optional season."""
        return [
            image
            for image in self.items
            if (category == ALL_CATEGORIES or image.category == category)
            and (season is None or image.season == season)
        ]

    async def _fetch(self) -> list[GalleryImage]:
        return await self.api_client.list_gallery(limit=self.limit)
