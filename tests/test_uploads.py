"""Tests for image uploads and their registration."""

import asyncio

import pytest

from mpl_site.containers import SiteContainer
from mpl_site.errors import (
    AuthError,
    NetworkError,
    RegistrationError,
    UploadError,
    ValidationError,
)
from mpl_site.services.uploads import UploadClient, gallery_folder, winner_folder
from tests.conftest import FakeMediaClient, FakeMplApiClient, make_image


def test_folders() -> None:
    assert gallery_folder("ceremony") == "mpl/gallery/ceremony"
    assert winner_folder(13) == "mpl/winners/season-13"


@pytest.mark.parametrize(
    ("file", "message"),
    [
        (make_image(size=0), "Please select an image first"),
        (make_image(content_type="application/pdf"), "Please select an image file"),
        (make_image(size=6 * 1024 * 1024), "Image size should be less than 5MB"),
    ],
)
def test_invalid_files_never_reach_media_host(file, message) -> None:
    media = FakeMediaClient()

    with pytest.raises(ValidationError, match=message):
        asyncio.run(UploadClient(media_client=media).upload(file, "mpl/gallery"))

    assert media.folders == []


def test_file_at_limit_is_accepted() -> None:
    media = FakeMediaClient()
    client = UploadClient(media_client=media)

    image = asyncio.run(client.upload(make_image(size=5 * 1024 * 1024), "mpl/x"))

    assert image.size_bytes == 5 * 1024 * 1024
    assert not client.uploading


def test_upload_flag_resets_after_failure() -> None:
    media = FakeMediaClient(failure=UploadError("Upload failed"))
    client = UploadClient(media_client=media)

    with pytest.raises(UploadError):
        asyncio.run(client.upload(make_image(), "mpl/x"))

    assert not client.uploading


def test_gallery_upload_registers_image(
    admin_container: SiteContainer,
    api_client: FakeMplApiClient,
    media_client: FakeMediaClient,
) -> None:
    image = asyncio.run(
        admin_container.uploads.add_gallery_image(
            make_image(), title="Trophy lift", category="ceremony", season=13
        )
    )

    assert media_client.folders == ["mpl/gallery/ceremony"]
    assert image.cloudinary_id == "mpl/gallery/ceremony/final"
    assert image.title == "Trophy lift"
    assert admin_container.gallery.items[-1] == image


def test_gallery_upload_defaults_title_to_filename(
    admin_container: SiteContainer,
) -> None:
    image = asyncio.run(
        admin_container.uploads.add_gallery_image(make_image(filename="toss.png"))
    )

    assert image.title == "toss"
    assert image.category == "general"


def test_gallery_upload_requires_session(
    container: SiteContainer, media_client: FakeMediaClient
) -> None:
    with pytest.raises(AuthError):
        asyncio.run(container.uploads.add_gallery_image(make_image()))

    assert media_client.folders == []


def test_unknown_category_is_rejected_before_upload(
    admin_container: SiteContainer, media_client: FakeMediaClient
) -> None:
    with pytest.raises(ValidationError, match="Unknown gallery category"):
        asyncio.run(
            admin_container.uploads.add_gallery_image(make_image(), category="misc")
        )

    assert media_client.folders == []


def test_registration_failure_reports_orphaned_image(
    admin_container: SiteContainer,
    api_client: FakeMplApiClient,
    media_client: FakeMediaClient,
) -> None:
    api_client.failures["add_gallery_image"] = NetworkError("Server error", 500)

    with pytest.raises(RegistrationError) as raised:
        asyncio.run(admin_container.uploads.add_gallery_image(make_image()))

    assert raised.value.image.external_id in media_client.stored
    assert isinstance(raised.value.cause, NetworkError)
    assert raised.value.message == "Image uploaded but not saved: Server error"
    assert admin_container.gallery.items == []


def test_winner_image_is_attached_to_season(
    admin_container: SiteContainer, api_client: FakeMplApiClient
) -> None:
    winners = admin_container.winners
    asyncio.run(winners.fetch_all())

    uploaded = asyncio.run(
        admin_container.uploads.set_winner_image(make_image(), season=13)
    )

    assert uploaded.external_id == "mpl/winners/season-13/final"
    assert winners.get("13").image_url == uploaded.url
    assert api_client.winners[1].image_url == uploaded.url


def test_upload_only_uses_admin_folder(
    admin_container: SiteContainer,
    api_client: FakeMplApiClient,
    media_client: FakeMediaClient,
) -> None:
    asyncio.run(admin_container.uploads.upload_only(make_image(), "sponsors"))

    assert media_client.folders == ["mpl/sponsors"]
    assert api_client.calls == []
