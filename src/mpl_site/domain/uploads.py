"""Domain models for image uploads."""

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class PendingUpload:
    """Selected image waiting to be sent to the media host."""

    filename: str
    content_type: str
    content: bytes
    category: str | None = None
    season: int | None = None
    resource_id: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def stem(self) -> str:
        """Filename without its extension, used as a default title."""
        return PurePath(self.filename).stem


@dataclass(frozen=True)
class UploadedImage:
    """Durable reference returned by the media host."""

    url: str
    external_id: str
    format: str | None = None
    size_bytes: int | None = None
