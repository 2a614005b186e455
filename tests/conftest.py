"""Shared test fixtures."""

from dataclasses import dataclass, field, replace

import pytest

from mpl_site.adapters.cloudinary_client import MediaHostClient
from mpl_site.adapters.mpl_api_client import MplApiClient
from mpl_site.config import Settings
from mpl_site.containers import SiteContainer, assemble_container
from mpl_site.domain.contacts import Contact
from mpl_site.domain.gallery import GalleryImage, GalleryImageDraft
from mpl_site.domain.live_scores import LiveScoreDraft, LiveScoreLink
from mpl_site.domain.sponsors import Sponsor
from mpl_site.domain.uploads import PendingUpload, UploadedImage
from mpl_site.domain.winners import Winner, WinnerDraft
from mpl_site.errors import AuthError, ConflictError, SiteError, UploadError
from mpl_site.services.tokens import InMemoryTokenStore

VALID_TOKEN = "abc123"
ADMIN_PASSWORD = "secret"


@dataclass
class FakeMplApiClient(MplApiClient):
    """In-memory stand-in for the MPL API that records every call."""

    password: str = ADMIN_PASSWORD
    valid_tokens: set[str] = field(default_factory=lambda: {VALID_TOKEN})
    winners: list[Winner] = field(default_factory=list)
    gallery: list[GalleryImage] = field(default_factory=list)
    sponsors: list[Sponsor] = field(default_factory=list)
    live_scores: list[LiveScoreLink] = field(default_factory=list)
    contacts: list[Contact] = field(default_factory=list)
    failures: dict[str, SiteError] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    seen_tokens: list[str] = field(default_factory=list)
    next_id: int = 100

    def _enter(self, name: str, token: str | None = None) -> None:
        self.calls.append(name)
        if token is not None:
            self.seen_tokens.append(token)
        failure = self.failures.get(name)
        if failure is not None:
            raise failure
        if token is not None and token not in self.valid_tokens:
            raise AuthError("Session expired. Please login again.")

    def _issue_id(self, prefix: str) -> str:
        self.next_id += 1
        return f"{prefix}{self.next_id}"

    async def login(self, password: str) -> str:
        self._enter("login")
        if password != self.password:
            raise AuthError("Invalid password")
        return VALID_TOKEN

    async def verify(self, token: str) -> bool:
        self._enter("verify")
        return token in self.valid_tokens

    async def list_winners(self) -> list[Winner]:
        self._enter("list_winners")
        return list(self.winners)

    async def add_winner(self, token: str, draft: WinnerDraft) -> Winner:
        self._enter("add_winner", token)
        if any(winner.season == draft.season for winner in self.winners):
            raise ConflictError(f"Season {draft.season} already exists")
        winner = Winner(
            season=draft.season,
            team_name=draft.team_name,
            captain=draft.captain or None,
        )
        self.winners.append(winner)
        return winner

    async def set_winner_image(
        self, token: str, season: int, image_url: str, cloudinary_id: str
    ) -> None:
        self._enter("set_winner_image", token)
        self.winners = [
            replace(winner, image_url=image_url) if winner.season == season else winner
            for winner in self.winners
        ]

    async def list_gallery(self, limit: int | None = None) -> list[GalleryImage]:
        self._enter("list_gallery")
        return list(self.gallery if limit is None else self.gallery[:limit])

    async def add_gallery_image(
        self, token: str, draft: GalleryImageDraft
    ) -> GalleryImage:
        self._enter("add_gallery_image", token)
        image = GalleryImage(
            id=self._issue_id("g"),
            title=draft.title,
            image_url=draft.image_url,
            category=draft.category,
            season=draft.season,
            cloudinary_id=draft.cloudinary_id,
        )
        self.gallery.insert(0, image)
        return image

    async def delete_gallery_image(self, token: str, image_id: str) -> None:
        self._enter("delete_gallery_image", token)
        self.gallery = [image for image in self.gallery if image.id != image_id]

    async def list_sponsors(self) -> list[Sponsor]:
        self._enter("list_sponsors")
        return list(self.sponsors)

    async def update_sponsors(self, token: str, sponsors: list[Sponsor]) -> None:
        self._enter("update_sponsors", token)
        self.sponsors = [
            sponsor
            if sponsor.is_committed
            else replace(sponsor, id=self._issue_id("s"))
            for sponsor in sponsors
        ]

    async def list_live_scores(self) -> list[LiveScoreLink]:
        self._enter("list_live_scores")
        return list(self.live_scores)

    async def create_live_score(
        self, token: str, draft: LiveScoreDraft
    ) -> LiveScoreLink:
        self._enter("create_live_score", token)
        link = LiveScoreLink(id=self._issue_id("l"), **vars(draft))
        self.live_scores.append(link)
        return link

    async def update_live_score(
        self, token: str, link_id: str, draft: LiveScoreDraft
    ) -> LiveScoreLink:
        self._enter("update_live_score", token)
        link = LiveScoreLink(id=link_id, **vars(draft))
        self.live_scores = [
            link if item.id == link_id else item for item in self.live_scores
        ]
        return link

    async def delete_live_score(self, token: str, link_id: str) -> None:
        self._enter("delete_live_score", token)
        self.live_scores = [item for item in self.live_scores if item.id != link_id]

    async def list_contacts(self) -> list[Contact]:
        self._enter("list_contacts")
        return list(self.contacts)


@dataclass
class FakeMediaClient(MediaHostClient):
    """Media host that keeps uploaded files in memory."""

    stored: dict[str, PendingUpload] = field(default_factory=dict)
    folders: list[str] = field(default_factory=list)
    failure: UploadError | None = None

    async def upload_image(self, file: PendingUpload, folder: str) -> UploadedImage:
        self.folders.append(folder)
        if self.failure is not None:
            raise self.failure
        public_id = f"{folder}/{file.stem}"
        self.stored[public_id] = file
        return UploadedImage(
            url=f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg",
            external_id=public_id,
            format="jpg",
            size_bytes=file.size_bytes,
        )


def make_image(
    size: int = 1024, content_type: str = "image/jpeg", filename: str = "final.jpg"
) -> PendingUpload:
    return PendingUpload(
        filename=filename, content_type=content_type, content=b"x" * size
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_base_url="https://api.test",
        cloudinary_cloud_name="demo",
        cloudinary_upload_preset="preset",
        token_path=tmp_path / "token.json",
    )


@pytest.fixture
def api_client() -> FakeMplApiClient:
    return FakeMplApiClient(
        winners=[
            Winner(season=12, team_name="Kotha"),
            Winner(season=13, team_name="Edara"),
            Winner(season=11, team_name="Marella XI"),
        ],
        gallery=[
            GalleryImage(
                id="g1", title="Final", image_url="https://img/g1.jpg", season=13
            ),
            GalleryImage(
                id="g2",
                title="Toss",
                image_url="https://img/g2.jpg",
                category="matches",
                season=12,
            ),
        ],
        sponsors=[
            Sponsor(
                id="s2",
                sponsor_type="post-match",
                award_name="Best Bowler",
                sponsor_name="Reddy Traders",
                priority=2,
            ),
            Sponsor(
                id="s1",
                sponsor_type="title",
                award_name="Title Sponsor",
                sponsor_name="Sagar Agencies",
                priority=1,
            ),
        ],
        live_scores=[
            LiveScoreLink(
                id="l1",
                title="Season 14 Final",
                url="https://cricheroes.com/tournament/mpl-14",
                season=14,
            )
        ],
        contacts=[Contact(name="Live Organizer", phone="9000000001")],
    )


@pytest.fixture
def media_client() -> FakeMediaClient:
    return FakeMediaClient()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def container(
    settings: Settings,
    api_client: FakeMplApiClient,
    media_client: FakeMediaClient,
    token_store: InMemoryTokenStore,
) -> SiteContainer:
    async def close_resources() -> None:
        return None

    return assemble_container(
        settings=settings,
        api_client=api_client,
        media_client=media_client,
        token_store=token_store,
        close_resources=close_resources,
    )


@pytest.fixture
def admin_container(
    container: SiteContainer, token_store: InMemoryTokenStore
) -> SiteContainer:
    token_store.set(VALID_TOKEN)
    return container
