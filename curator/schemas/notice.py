"""Notice Schemas — bilingual announcements and translation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from curator.schemas.common import RequiredText


class NoticeCreate(BaseModel):
    title_ko: RequiredText
    content_ko: RequiredText
    title_en: str | None = None
    content_en: str | None = None
    is_published: bool = False


class NoticeUpdate(BaseModel):
    title_ko: RequiredText | None = None
    content_ko: RequiredText | None = None
    title_en: str | None = None
    content_en: str | None = None


class NoticePublish(BaseModel):
    is_published: bool


class NoticeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title_ko: str
    title_en: str | None
    content_ko: str
    content_en: str | None
    author_id: str
    is_published: bool
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime


class NoticeTranslateRequest(BaseModel):
    title: RequiredText
    content: RequiredText


class NoticeTranslation(BaseModel):
    title_en: str
    content_en: str
