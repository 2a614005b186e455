"""Dependency container wiring for the site client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mpl_site.adapters.cloudinary_client import HttpxCloudinaryClient, MediaHostClient
from mpl_site.adapters.file_token_store import FileTokenStore
from mpl_site.adapters.mpl_api_client import HttpxMplApiClient, MplApiClient
from mpl_site.config import Settings, cloudinary_upload_url
from mpl_site.services.auth_gate import AuthGate
from mpl_site.services.contacts import ContactsClient
from mpl_site.services.fallbacks import FallbackPolicy
from mpl_site.services.gallery import GalleryClient
from mpl_site.services.live_scores import LiveScoresClient
from mpl_site.services.notifications import Notifier
from mpl_site.services.session import Session
from mpl_site.services.sponsors import SponsorsClient
from mpl_site.services.tokens import TokenStore
from mpl_site.services.uploads import ImageUploadService, UploadClient
from mpl_site.services.winners import WinnersClient
from mpl_site.views.admin import AdminPanelView, LoginView
from mpl_site.views.contact import ContactView
from mpl_site.views.gallery import GalleryView
from mpl_site.views.home import HomeView
from mpl_site.views.sponsors import SponsorsView
from mpl_site.views.winners import WinnersView


@dataclass
class SiteContainer:
    """Holds the session, collections and views of one page load."""

    settings: Settings
    session: Session
    gate: AuthGate
    notifier: Notifier
    winners: WinnersClient
    gallery: GalleryClient
    sponsors: SponsorsClient
    live_scores: LiveScoresClient
    contacts: ContactsClient
    uploads: ImageUploadService
    home_view: HomeView
    winners_view: WinnersView
    gallery_view: GalleryView
    sponsors_view: SponsorsView
    contact_view: ContactView
    login_view: LoginView
    admin_panel_view: AdminPanelView
    close_resources: Callable[[], Awaitable[None]]


def assemble_container(  # noqa: PLR0913
    settings: Settings,
    api_client: MplApiClient,
    media_client: MediaHostClient,
    token_store: TokenStore,
    close_resources: Callable[[], Awaitable[None]],
    fallback_policy: FallbackPolicy | None = None,
) -> SiteContainer:
    """Wire services and views around already-built adapters."""
    notifier = Notifier()
    session = Session(store=token_store, auth_client=api_client)
    gate = AuthGate(session=session, auth_client=api_client)
    fallbacks = fallback_policy or FallbackPolicy()
    shared = {
        "api_client": api_client,
        "session": session,
        "fallback_policy": fallbacks,
        "notifier": notifier,
    }
    winners = WinnersClient(**shared)
    gallery = GalleryClient(**shared)
    sponsors = SponsorsClient(**shared)
    live_scores = LiveScoresClient(**shared)
    contacts = ContactsClient(**shared)
    uploads = ImageUploadService(
        upload_client=UploadClient(
            media_client=media_client, max_bytes=settings.max_upload_bytes
        ),
        session=session,
        gallery=gallery,
        winners=winners,
    )
    return SiteContainer(
        settings=settings,
        session=session,
        gate=gate,
        notifier=notifier,
        winners=winners,
        gallery=gallery,
        sponsors=sponsors,
        live_scores=live_scores,
        contacts=contacts,
        uploads=uploads,
        home_view=HomeView(winners, live_scores, gate, notifier),
        winners_view=WinnersView(winners, uploads, gate, notifier),
        gallery_view=GalleryView(gallery, uploads, gate, notifier),
        sponsors_view=SponsorsView(sponsors, gate, notifier),
        contact_view=ContactView(contacts, notifier),
        login_view=LoginView(session, gate, notifier),
        admin_panel_view=AdminPanelView(
            gallery, winners, sponsors, uploads, session, notifier
        ),
        close_resources=close_resources,
    )


def build_container(
    settings: Settings | None = None, token_store: TokenStore | None = None
) -> SiteContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_client = HttpxMplApiClient.create(
        base_url=resolved_settings.api_base_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    media_client = HttpxCloudinaryClient.create(
        upload_url=cloudinary_upload_url(resolved_settings),
        upload_preset=resolved_settings.cloudinary_upload_preset,
        api_key=resolved_settings.cloudinary_api_key,
        timeout=resolved_settings.upload_timeout_seconds,
    )

    async def close_resources() -> None:
        await api_client.close()
        await media_client.close()

    return assemble_container(
        settings=resolved_settings,
        api_client=api_client,
        media_client=media_client,
        token_store=token_store or FileTokenStore(resolved_settings.token_path),
        close_resources=close_resources,
    )
