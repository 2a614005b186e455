"""Direct-to-host image uploads and their registration with the API."""

import logging
from dataclasses import dataclass

from mpl_site.adapters.cloudinary_client import MediaHostClient
from mpl_site.config import MAX_UPLOAD_BYTES
from mpl_site.domain.gallery import GALLERY_CATEGORIES, GalleryImage, GalleryImageDraft
from mpl_site.domain.uploads import PendingUpload, UploadedImage
from mpl_site.errors import (
    OperationInProgressError,
    RegistrationError,
    SiteError,
    ValidationError,
)
from mpl_site.services.gallery import GalleryClient
from mpl_site.services.session import Session
from mpl_site.services.winners import WinnersClient

_logger = logging.getLogger(__name__)


def gallery_folder(category: str) -> str:
    return f"mpl/gallery/{category}"


def winner_folder(season: int) -> str:
    return f"mpl/winners/season-{season}"


@dataclass
class UploadClient:
    """Sends validated images straight to the media host."""

    media_client: MediaHostClient
    max_bytes: int = MAX_UPLOAD_BYTES
    uploading: bool = False

    def validate(self, file: PendingUpload) -> None:
        """Reject files the media host should never see."""
        if not file.content:
            raise ValidationError("Please select an image first")
        if not file.content_type.startswith("image/"):
            raise ValidationError("Please select an image file")
        if file.size_bytes > self.max_bytes:
            raise ValidationError("Image size should be less than 5MB")

    async def upload(self, file: PendingUpload, destination: str) -> UploadedImage:
        """Upload ``file`` into the ``destination`` folder."""
        self.validate(file)
        if self.uploading:
            raise OperationInProgressError("upload")
        self.uploading = True
        try:
            image = await self.media_client.upload_image(file, destination)
        finally:
            self.uploading = False
        _logger.info(
            "Uploaded %s to %s as %s", file.filename, destination, image.external_id
        )
        return image


@dataclass
class ImageUploadService:
    """Uploads an image, then records it with the resource that owns it.

    The second step can fail after the first succeeded; the image then stays
    on the media host without a record and is reported, not deleted.
    """

    upload_client: UploadClient
    session: Session
    gallery: GalleryClient
    winners: WinnersClient

    async def add_gallery_image(
        self,
        file: PendingUpload,
        *,
        title: str | None = None,
        category: str = "general",
        season: int | None = None,
    ) -> GalleryImage:
        """Upload into the category folder and add the image to the gallery."""
        if category not in GALLERY_CATEGORIES:
            raise ValidationError(f"Unknown gallery category: {category}")
        if season is not None and season < 1:
            raise ValidationError("Please enter a valid season number")
        self.upload_client.validate(file)
        self.session.require_token()
        image = await self.upload_client.upload(file, gallery_folder(category))
        draft = GalleryImageDraft(
            title=(title or file.stem).strip() or file.stem,
            image_url=image.url,
            category=category,
            season=season,
            cloudinary_id=image.external_id,
        )
        try:
            return await self.gallery.create(draft)
        except SiteError as exc:
            raise _orphaned(image, exc) from exc

    async def set_winner_image(
        self, file: PendingUpload, season: int
    ) -> UploadedImage:
        """Upload into the season folder and attach the image to the season."""
        self.upload_client.validate(file)
        self.session.require_token()
        image = await self.upload_client.upload(file, winner_folder(season))
        try:
            await self.winners.attach_image(season, image)
        except SiteError as exc:
            raise _orphaned(image, exc) from exc
        return image

    async def upload_only(self, file: PendingUpload, folder: str) -> UploadedImage:
        """Upload into ``mpl/<folder>`` without creating any record."""
        self.session.require_token()
        return await self.upload_client.upload(file, f"mpl/{folder}")


def _orphaned(image: UploadedImage, cause: SiteError) -> RegistrationError:
    _logger.error(
        "Image %s uploaded but not saved: %s", image.external_id, cause.message
    )
    return RegistrationError(
        f"Image uploaded but not saved: {cause.message}", image=image, cause=cause
    )
