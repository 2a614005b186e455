"""Cloudinary unsigned upload client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from mpl_site.domain.uploads import PendingUpload, UploadedImage
from mpl_site.errors import UploadError

_logger = logging.getLogger(__name__)


class MediaHostClient(Protocol):
    """Interface for sending image bytes to the media host."""

    async def upload_image(self, file: PendingUpload, folder: str) -> UploadedImage:
        """Upload an image into ``folder`` and return its durable reference."""


@dataclass
class HttpxCloudinaryClient(MediaHostClient):
    """Cloudinary client posting multipart uploads with an unsigned preset."""

    upload_url: str
    upload_preset: str
    http_client: httpx.AsyncClient
    api_key: str | None = None
    timeout: float = 60

    @classmethod
    def create(
        cls,
        upload_url: str,
        upload_preset: str,
        api_key: str | None = None,
        timeout: float = 60,
    ) -> "HttpxCloudinaryClient":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            upload_url=upload_url,
            upload_preset=upload_preset,
            http_client=httpx.AsyncClient(),
            api_key=api_key,
            timeout=timeout,
        )

    async def upload_image(self, file: PendingUpload, folder: str) -> UploadedImage:
        """Upload an image into ``folder`` and return its durable reference."""
        data = {"upload_preset": self.upload_preset, "folder": folder}
        if self.api_key:
            data["api_key"] = self.api_key
        files = {"file": (file.filename, file.content, file.content_type)}
        try:
            response = await self.http_client.post(
                self.upload_url, data=data, files=files, timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            _logger.warning("Cloudinary upload to %s failed: %s", folder, exc)
            raise UploadError("Upload failed. Please try again.") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.is_error:
            raise UploadError(
                _host_error(payload) or "Upload failed",
                status_code=response.status_code,
            )
        if not isinstance(payload, dict) or not payload.get("secure_url"):
            raise UploadError("Upload failed: media host returned no image url")
        return UploadedImage(
            url=payload["secure_url"],
            external_id=str(payload.get("public_id", "")),
            format=payload.get("format"),
            size_bytes=payload.get("bytes"),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _host_error(payload: object) -> str | None:
    """Return Cloudinary's ``error.message`` if present."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None
