"""Domain models for gallery images."""

from dataclasses import dataclass

from mpl_site.errors import ValidationError

GALLERY_CATEGORIES = ("general", "matches", "winners", "ceremony", "teams")


@dataclass(frozen=True)
class GalleryImage:
    """Image stored on the media host and listed in the gallery."""

    id: str
    title: str
    image_url: str
    category: str = "general"
    season: int | None = None
    cloudinary_id: str | None = None


@dataclass(frozen=True)
class GalleryImageDraft:
    """Gallery record to register after an upload."""

    title: str
    image_url: str
    category: str = "general"
    season: int | None = None
    cloudinary_id: str | None = None

    def validate(self) -> None:
        """Reject drafts without a title, image or known category."""
        if not self.title.strip():
            raise ValidationError("Please enter an image title")
        if not self.image_url.strip():
            raise ValidationError("Please select an image first")
        if self.category not in GALLERY_CATEGORIES:
            raise ValidationError(f"Unknown gallery category: {self.category}")
        if self.season is not None and self.season < 1:
            raise ValidationError("Please enter a valid season number")
