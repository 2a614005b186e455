"""Pydantic models for MPL API payloads."""

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mpl_site.domain.contacts import Contact
from mpl_site.domain.gallery import GalleryImage, GalleryImageDraft
from mpl_site.domain.live_scores import LiveScoreDraft, LiveScoreLink
from mpl_site.domain.sponsors import Sponsor
from mpl_site.domain.winners import Winner, WinnerDraft


class ApiEnvelope(BaseModel):
    """Response wrapper shared by every MPL API endpoint."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    data: Any = None
    message: str | None = None
    token: str | None = None


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_api(self) -> dict[str, object]:
        """Serialize using the API's camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class WinnerPayload(_Payload):
    """Winner record as stored by the API."""

    season: int
    team_name: str = Field(alias="teamName")
    captain: str | None = None
    runner_up: str | None = Field(default=None, alias="runnerUp")
    third_place: str | None = Field(default=None, alias="thirdPlace")
    highlights: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    def to_domain(self) -> Winner:
        return Winner(**self.model_dump())

    @classmethod
    def from_draft(cls, draft: WinnerDraft) -> "WinnerPayload":
        return cls.model_validate(asdict(draft))


class GalleryImagePayload(_Payload):
    """Gallery image record as stored by the API."""

    id: str | None = Field(default=None, alias="_id")
    title: str = ""
    image_url: str = Field(alias="imageUrl")
    category: str = "general"
    season: int | None = None
    cloudinary_id: str | None = Field(default=None, alias="cloudinaryId")

    def to_domain(self) -> GalleryImage:
        values = self.model_dump()
        values["id"] = self.id or ""
        return GalleryImage(**values)

    @classmethod
    def from_draft(cls, draft: GalleryImageDraft) -> "GalleryImagePayload":
        return cls.model_validate(asdict(draft))

    def to_api(self) -> dict[str, object]:
        """Serialize for creation; the gallery add endpoint expects a null season."""
        payload = self.model_dump(by_alias=True, exclude={"id"})
        return {
            key: value
            for key, value in payload.items()
            if value is not None or key == "season"
        }


class SponsorPayload(_Payload):
    """Sponsor record as stored by the API."""

    id: str | None = Field(default=None, alias="_id")
    sponsor_type: str = Field(default="post-match", alias="type")
    award_name: str = Field(default="", alias="awardName")
    sponsor_name: str = Field(default="", alias="sponsorName")
    sponsor_details: str = Field(default="", alias="sponsorDetails")
    priority: int = 0
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("sponsor_details", mode="before")
    @classmethod
    def _blank_details(cls, value: object) -> object:
        return "" if value is None else value

    def to_domain(self) -> Sponsor:
        values = self.model_dump()
        values["id"] = self.id or ""
        return Sponsor(**values)

    @classmethod
    def from_domain(cls, sponsor: Sponsor) -> "SponsorPayload":
        values = asdict(sponsor)
        if not sponsor.is_committed:
            values["id"] = None
        return cls.model_validate(values)


class LiveScorePayload(_Payload):
    """Live score link as stored by the API."""

    id: str | None = None
    title: str
    url: str
    description: str = ""
    match_type: str = Field(default="upcoming", alias="matchType")
    season: int | str | None = None
    date: str = ""
    is_active: bool = Field(default=True, alias="isActive")

    @model_validator(mode="before")
    @classmethod
    def _accept_mongo_id(cls, data: object) -> object:
        if isinstance(data, dict) and data.get("id") is None and "_id" in data:
            return {**data, "id": data["_id"]}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        return None if value is None else str(value)

    @field_validator("description", "date", mode="before")
    @classmethod
    def _blank_text(cls, value: object) -> object:
        return "" if value is None else value

    def to_domain(self) -> LiveScoreLink:
        values = self.model_dump()
        values["id"] = self.id or ""
        return LiveScoreLink(**values)

    @classmethod
    def from_draft(cls, draft: LiveScoreDraft) -> "LiveScorePayload":
        return cls.model_validate(asdict(draft))


class ContactPayload(_Payload):
    """Organizer contact as published by the API."""

    name: str
    phone: str

    @field_validator("phone", mode="before")
    @classmethod
    def _stringify_phone(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value

    def to_domain(self) -> Contact:
        return Contact(name=self.name, phone=self.phone)
