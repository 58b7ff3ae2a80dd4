"""Generation Schemas — request bodies for one-shot generation and image analysis.

Invariants:
    - Required inputs mirror what each prompt cannot do without (title, keywords, artist name)
    - MarketingReportRequest carries arbitrary exhibition fields (extra="allow"):
      the whole payload is handed to the prompt as exhibition data
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from curator.core.domain_types import Locale
from curator.schemas.common import LocaleField, RequiredText


class TitlesRequest(BaseModel):
    keywords: list[str] = Field(min_length=1)
    artwork_descriptions: list[str] = Field(default_factory=list)
    conversation_context: str = ""
    locale: LocaleField = Locale.KO


class TextRequest(BaseModel):
    """Introduction / preface input."""
    title: RequiredText
    keywords: list[str]
    locale: LocaleField = Locale.KO


class ArtistBioRequest(BaseModel):
    artist_name: RequiredText
    keywords: list[str] = Field(default_factory=list)
    title: str = ""
    locale: LocaleField = Locale.KO


class ArtworkDescriptionsRequest(BaseModel):
    artworks: list[dict] = Field(min_length=1)
    title: str = ""
    keywords: list[str] = Field(default_factory=list)
    locale: LocaleField = Locale.KO


class MarketingReportRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str | None = None
    keywords: list[str] | None = None
    locale: LocaleField = Locale.KO

    @model_validator(mode="after")
    def require_title_or_keywords(self):
        if not self.title and not self.keywords:
            raise ValueError("title or keywords required")
        return self

    def exhibition_data(self) -> dict:
        return self.model_dump(exclude={"locale"}, exclude_none=True)


class PressReleaseRequest(BaseModel):
    title: RequiredText
    keywords: list[str] = Field(min_length=1)
    introduction: str | None = None
    preface: str | None = None
    artist_name: str | None = None
    exhibition_date: str | None = None
    exhibition_end_date: str | None = None
    venue: str | None = None
    location: str | None = None
    opening_hours: str | None = None
    admission_fee: str | None = None
    locale: LocaleField = Locale.KO


class ConversationSummaryRequest(BaseModel):
    exhibition_id: UUID
    locale: LocaleField = Locale.KO


class PosterPlaceholderRequest(BaseModel):
    exhibition_id: UUID | None = None
    title: str | None = None
    keywords: list[str] = Field(default_factory=list)
    main_image: str | None = None


class PosterImageRequest(BaseModel):
    exhibition_id: UUID | None = None
    title: RequiredText
    artist_name: str | None = None
    style: str | None = None
    keywords: list[str] = Field(default_factory=list)


class ImageUrlsRequest(BaseModel):
    """Vision input: analyze/images and analyze/poster-style."""
    image_urls: list[str] = Field(min_length=1, max_length=20)
    locale: LocaleField = Locale.KO
