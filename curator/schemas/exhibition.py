"""Exhibition Schemas — CRUD, content blocks, artworks and virtual gallery payloads.

Invariants:
    - ExhibitionUpdate.title is required and non-blank; other fields apply only when sent
    - ArtworkUpdate.description may be explicitly null (clears it)
    - Responses are built from ORM rows (from_attributes)

Design Decisions:
    - PATCH semantics via model_fields_set: omitted fields are untouched, explicit
      nulls are written
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from curator.core.domain_types import Locale
from curator.schemas.common import LocaleField, RequiredText


class ExhibitionMetadata(BaseModel):
    artist_name: str | None = Field(None, max_length=255)
    venue: str | None = Field(None, max_length=255)
    location: str | None = None
    exhibition_date: str | None = Field(None, max_length=64)
    exhibition_end_date: str | None = Field(None, max_length=64)
    opening_hours: str | None = Field(None, max_length=255)
    admission_fee: str | None = Field(None, max_length=255)


class ExhibitionCreate(ExhibitionMetadata):
    title: str | None = None
    keywords: list[str] = Field(default_factory=list)


class ExhibitionUpdate(ExhibitionMetadata):
    title: RequiredText
    keywords: list[str] | None = None
    status: Literal["draft", "in_progress", "complete"] | None = None
    is_public: bool | None = None


class ArtworkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exhibition_id: UUID
    title: str
    description: str | None
    image_url: str
    order_index: int
    aspect_ratio: float
    created_at: datetime


class ContentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exhibition_id: UUID
    content_type: str
    content: dict
    version: int
    created_at: datetime
    updated_at: datetime


class ExhibitionResponse(ExhibitionMetadata):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    title: str | None
    keywords: list[str]
    status: str
    is_public: bool
    public_slug: str | None
    view_count: int
    posters: list[str]
    created_at: datetime
    updated_at: datetime


class ExhibitionDetail(ExhibitionResponse):
    curator_conversation: list[dict]
    artworks: list[ArtworkResponse]
    contents: list[ContentResponse]


class ExhibitionList(BaseModel):
    items: list[ExhibitionResponse]
    limit: int
    offset: int


class DuplicateRequest(BaseModel):
    locale: LocaleField = Locale.KO


class ContentUpsert(BaseModel):
    content_type: RequiredText = Field(max_length=50)
    content: dict


class RegenerateRequest(BaseModel):
    content_type: RequiredText = Field(max_length=50)
    exhibition_data: dict = Field(default_factory=dict)
    locale: LocaleField = Locale.KO


class ArtworkUpdate(BaseModel):
    title: RequiredText
    description: str | None = None


class VirtualArtworkInput(BaseModel):
    image_url: str
    title: str | None = None
    description: str | None = None
    order: int | None = Field(None, ge=0)
    aspect_ratio: float | None = Field(None, gt=0)


class VirtualExhibitionCreate(BaseModel):
    template_type: str = Field("2.5d_fixed", max_length=50)
    settings: dict = Field(default_factory=dict)
    artworks: list[VirtualArtworkInput] = Field(default_factory=list)
    locale: LocaleField = Locale.KO


class VirtualExhibitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exhibition_id: UUID
    template_type: str
    settings: dict
    created_at: datetime
