"""MPL REST API client."""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

import httpx
from pydantic import ValidationError as PayloadError

from mpl_site.adapters.api_models import (
    ApiEnvelope,
    ContactPayload,
    GalleryImagePayload,
    LiveScorePayload,
    SponsorPayload,
    WinnerPayload,
)
from mpl_site.domain.contacts import Contact
from mpl_site.domain.gallery import GalleryImage, GalleryImageDraft
from mpl_site.domain.live_scores import LiveScoreDraft, LiveScoreLink
from mpl_site.domain.sponsors import Sponsor
from mpl_site.domain.winners import Winner, WinnerDraft
from mpl_site.errors import AuthError, ConflictError, NetworkError

_logger = logging.getLogger(__name__)

_PayloadT = TypeVar(
    "_PayloadT",
    WinnerPayload,
    GalleryImagePayload,
    SponsorPayload,
    LiveScorePayload,
    ContactPayload,
)


class AdminAuthClient(Protocol):
    """Interface for the admin login and token verification endpoints."""

    async def login(self, password: str) -> str:
        """Exchange the admin password for a bearer token."""

    async def verify(self, token: str) -> bool:
        """Return True when the server confirms the token."""


class MplApiClient(AdminAuthClient, Protocol):
    """Interface for every MPL API interaction."""

    async def list_winners(self) -> list[Winner]:
        """Return all season winners."""

    async def add_winner(self, token: str, draft: WinnerDraft) -> Winner:
        """Create a season and return the stored record."""

    async def set_winner_image(
        self, token: str, season: int, image_url: str, cloudinary_id: str
    ) -> None:
        """Attach an uploaded image to a season."""

    async def list_gallery(self, limit: int | None = None) -> list[GalleryImage]:
        """Return gallery images, newest first."""

    async def add_gallery_image(
        self, token: str, draft: GalleryImageDraft
    ) -> GalleryImage:
        """Register an uploaded image in the gallery."""

    async def delete_gallery_image(self, token: str, image_id: str) -> None:
        """Delete a gallery image record."""

    async def list_sponsors(self) -> list[Sponsor]:
        """Return all sponsors."""

    async def update_sponsors(self, token: str, sponsors: list[Sponsor]) -> None:
        """Replace the sponsor list with the given one."""

    async def list_live_scores(self) -> list[LiveScoreLink]:
        """Return all live score links."""

    async def create_live_score(
        self, token: str, draft: LiveScoreDraft
    ) -> LiveScoreLink:
        """Create a live score link."""

    async def update_live_score(
        self, token: str, link_id: str, draft: LiveScoreDraft
    ) -> LiveScoreLink:
        """Update a live score link and return the stored record."""

    async def delete_live_score(self, token: str, link_id: str) -> None:
        """Delete a live score link."""

    async def list_contacts(self) -> list[Contact]:
        """Return the organizer contact list."""


@dataclass
class HttpxMplApiClient(MplApiClient):
    """MPL API client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxMplApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def login(self, password: str) -> str:
        """Exchange the admin password for a bearer token."""
        envelope = await self._request(
            "POST",
            "/api/admin/login",
            json={"password": password},
            auth_message="Invalid password",
        )
        if not envelope.success:
            raise AuthError(envelope.message or "Invalid password")
        if not envelope.token:
            raise NetworkError("Login response did not include a token")
        return envelope.token

    async def verify(self, token: str) -> bool:
        """Return True when the server confirms the token."""
        envelope = await self._request("GET", "/api/admin/verify", token=token)
        return envelope.success

    async def list_winners(self) -> list[Winner]:
        """Return all season winners."""
        envelope = await self._request("GET", "/api/winners")
        rows = _expect_list(envelope, "Failed to load winners")
        return [_parse(WinnerPayload, row).to_domain() for row in rows]

    async def add_winner(self, token: str, draft: WinnerDraft) -> Winner:
        """Create a season and return the stored record."""
        envelope = await self._request(
            "POST",
            "/api/winners/add",
            token=token,
            json=WinnerPayload.from_draft(draft).to_api(),
        )
        row = _expect_record(envelope, "Failed to add season")
        return _parse(WinnerPayload, row).to_domain()

    async def set_winner_image(
        self, token: str, season: int, image_url: str, cloudinary_id: str
    ) -> None:
        """Attach an uploaded image to a season."""
        envelope = await self._request(
            "PUT",
            f"/api/winners/season/{season}/image",
            token=token,
            json={"imageUrl": image_url, "cloudinaryId": cloudinary_id},
        )
        _expect_success(envelope, "Failed to save season image")

    async def list_gallery(self, limit: int | None = None) -> list[GalleryImage]:
        """Return gallery images, optionally capped at ``limit``."""
        params = {"limit": limit} if limit is not None else None
        envelope = await self._request("GET", "/api/gallery", params=params)
        rows = _expect_list(envelope, "Failed to load gallery images")
        return [_parse(GalleryImagePayload, row).to_domain() for row in rows]

    async def add_gallery_image(
        self, token: str, draft: GalleryImageDraft
    ) -> GalleryImage:
        """Register an uploaded image in the gallery."""
        envelope = await self._request(
            "POST",
            "/api/gallery/add",
            token=token,
            json=GalleryImagePayload.from_draft(draft).to_api(),
        )
        row = _expect_record(envelope, "Failed to save image")
        return _parse(GalleryImagePayload, row).to_domain()

    async def delete_gallery_image(self, token: str, image_id: str) -> None:
        """Delete a gallery image record."""
        envelope = await self._request(
            "DELETE", f"/api/gallery/{image_id}", token=token
        )
        _expect_success(envelope, "Delete failed. Please try again.")

    async def list_sponsors(self) -> list[Sponsor]:
        """Return all sponsors."""
        envelope = await self._request("GET", "/api/sponsors")
        rows = _expect_list(envelope, "Failed to load sponsors")
        return [_parse(SponsorPayload, row).to_domain() for row in rows]

    async def update_sponsors(self, token: str, sponsors: list[Sponsor]) -> None:
        """Replace the sponsor list with the given one."""
        envelope = await self._request(
            "PUT",
            "/api/sponsors/update",
            token=token,
            json={
                "sponsors": [
                    SponsorPayload.from_domain(sponsor).to_api() for sponsor in sponsors
                ]
            },
        )
        _expect_success(envelope, "Failed to update sponsors")

    async def list_live_scores(self) -> list[LiveScoreLink]:
        """Return all live score links."""
        envelope = await self._request("GET", "/api/live-scores")
        rows = _expect_list(envelope, "Failed to load live score links")
        return [_parse(LiveScorePayload, row).to_domain() for row in rows]

    async def create_live_score(
        self, token: str, draft: LiveScoreDraft
    ) -> LiveScoreLink:
        """Create a live score link."""
        envelope = await self._request(
            "POST",
            "/api/live-scores",
            token=token,
            json=LiveScorePayload.from_draft(draft).to_api(),
        )
        row = _expect_record(envelope, "Failed to save live score link")
        return _parse(LiveScorePayload, row).to_domain()

    async def update_live_score(
        self, token: str, link_id: str, draft: LiveScoreDraft
    ) -> LiveScoreLink:
        """Update a live score link and return the stored record."""
        envelope = await self._request(
            "PUT",
            f"/api/live-scores/{link_id}",
            token=token,
            json=LiveScorePayload.from_draft(draft).to_api(),
        )
        row = _expect_record(envelope, "Failed to save live score link")
        return _parse(LiveScorePayload, row).to_domain()

    async def delete_live_score(self, token: str, link_id: str) -> None:
        """Delete a live score link."""
        envelope = await self._request(
            "DELETE", f"/api/live-scores/{link_id}", token=token
        )
        _expect_success(envelope, "Failed to delete live score link")

    async def list_contacts(self) -> list[Contact]:
        """Return the organizer contact list."""
        envelope = await self._request("GET", "/api/contact")
        rows = _expect_list(envelope, "Failed to load contacts")
        return [_parse(ContactPayload, row).to_domain() for row in rows]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, object] | None = None,
        params: dict[str, object] | None = None,
        auth_message: str = "Session expired. Please login again.",
    ) -> ApiEnvelope:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            _logger.warning("MPL API %s %s failed: %s", method, path, exc)
            raise NetworkError("Could not reach the server") from exc

        message = _error_message(response)
        if response.status_code in {
            httpx.codes.UNAUTHORIZED,
            httpx.codes.FORBIDDEN,
        }:
            raise AuthError(message or auth_message)
        if response.status_code == httpx.codes.CONFLICT:
            raise ConflictError(message or "Record already exists")
        if response.is_error:
            raise NetworkError(
                message or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return ApiEnvelope.model_validate(response.json())
        except (ValueError, PayloadError) as exc:
            raise NetworkError("Unexpected response from server") from exc


def _error_message(response: httpx.Response) -> str | None:
    """Extract the server's ``message`` field from an error response."""
    if not response.is_error:
        return None
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _expect_success(envelope: ApiEnvelope, fallback_message: str) -> None:
    if not envelope.success:
        raise NetworkError(envelope.message or fallback_message)


def _expect_list(envelope: ApiEnvelope, fallback_message: str) -> list[object]:
    _expect_success(envelope, fallback_message)
    if envelope.data is None:
        return []
    if not isinstance(envelope.data, list):
        raise NetworkError("Unexpected response from server")
    return envelope.data


def _expect_record(envelope: ApiEnvelope, fallback_message: str) -> object:
    _expect_success(envelope, fallback_message)
    if not isinstance(envelope.data, dict):
        raise NetworkError("Unexpected response from server")
    return envelope.data


def _parse(model: type[_PayloadT], row: object) -> _PayloadT:
    try:
        return model.model_validate(row)
    except PayloadError as exc:
        raise NetworkError("Unexpected response from server") from exc
